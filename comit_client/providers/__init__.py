from .base import WalletProvider

__all__ = ["WalletProvider"]
