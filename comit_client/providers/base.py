from abc import ABC, abstractmethod
from typing import Optional


class WalletProvider(ABC):
    """
    Wallet capability for one ledger.

    The client never moves funds itself; it hands ledger actions returned by
    cnd to an implementation of this interface.
    """

    name: str = "wallet"
    ledger: str = ""

    @abstractmethod
    async def fund(self, amount: int) -> None:
        """Fund the wallet with the ledger's native asset"""
        pass

    @abstractmethod
    async def send_to_address(self, address: str, amount: int) -> str:
        """Send ``amount`` (smallest unit) to ``address``; returns the transaction id"""
        pass

    @abstractmethod
    async def deploy_contract(self, data: str, value: int, gas_limit: Optional[int] = None) -> str:
        """Deploy a contract from ``data`` carrying ``value``; returns the transaction id"""
        pass

    @abstractmethod
    async def get_address(self) -> str:
        """Return an address owned by this wallet"""
        pass
