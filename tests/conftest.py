"""
Shared fixtures: an in-memory cnd behind ``httpx.MockTransport`` and fake wallets.

The fake daemon implements just enough of the REST API to walk a swap from
Start to AlphaFunded: creation, the ``accept`` Siren action, a HAL ``fund``
link that resolves to a ledger action, peer info and dialing.
"""

import itertools
import json
import re
from typing import Any, Dict, List, Optional

import httpx
import pytest

from comit_client.core.polling import PollConfig
from comit_client.providers.base import WalletProvider
from comit_client.providers.cnd import Cnd


CND_URL = "http://cnd.test"

LIGHTNING_PROBLEM = {
    "status": 400,
    "title": "lightning is not configured.",
    "detail": "lightning ledger is not properly configured, swap involving this ledger are not available.",
}

SWAP_NOT_FOUND = {"status": 404, "title": "Swap not found."}

INVALID_BODY = {"status": 400, "title": "Invalid body."}

_CREATE = re.compile(r"^/swaps/(rfc003|(?:hbit|herc20|halbit)/(?:hbit|herc20|halbit))$")
_SWAP = re.compile(r"^/swaps/(\d+)(/.*)?$")


def problem(body: Dict[str, Any]) -> httpx.Response:
    return httpx.Response(body["status"], json=body)


class FakeCnd:
    def __init__(
        self,
        peer_id: str = "QmAliceFake",
        listen_addresses: Optional[List[str]] = None,
        info: Optional[Dict[str, Any]] = None,
        fund_address: str = "bcrt1qfakehtlcaddress",
        instruction_fund: bool = False,
    ) -> None:
        self.info = info if info is not None else {
            "id": peer_id,
            "listen_addresses": listen_addresses or ["/ip4/127.0.0.1/tcp/9939"],
        }
        self.fund_address = fund_address
        self.instruction_fund = instruction_fund
        self.swaps: Dict[str, Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []
        self.dialed: List[List[str]] = []
        self._ids = itertools.count(123)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, base_url: str = CND_URL) -> Cnd:
        return Cnd(base_url, transport=self.transport)

    def add_swap(self, state: str = "Start", payload: Optional[Dict[str, Any]] = None) -> str:
        swap_id = str(next(self._ids))
        self.swaps[swap_id] = {"state": state, "payload": payload or {}, "accept": None}
        return swap_id

    def swap_body(self, swap_id: str) -> Dict[str, Any]:
        swap = self.swaps[swap_id]
        state = swap["state"]
        href = f"/swaps/{swap_id}"

        if state == "Start":
            # Siren representation
            return {
                "class": ["swap"],
                "properties": {"id": swap_id, "state": state, "protocol": "rfc003"},
                "actions": [
                    {
                        "name": "accept",
                        "href": f"{href}/accept",
                        "method": "POST",
                        "type": "application/json",
                        "fields": [
                            {"name": "beta_ledger_refund_identity", "class": ["ethereum", "address"]},
                            {"name": "beta_ledger_lock_duration", "value": 43200},
                        ],
                    },
                    {"name": "decline", "href": f"{href}/decline", "method": "POST", "fields": []},
                ],
                "links": [{"rel": ["self"], "href": href}],
            }

        # HAL representation
        links: Dict[str, Any] = {"self": {"href": href}}
        if state == "Accepted":
            links["fund"] = {"href": f"{href}/fund"}
        return {"state": state, "_links": links}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.method
        path = request.url.path

        if path == "/" and method == "GET":
            return httpx.Response(200, json=self.info)

        if path == "/dial" and method == "POST":
            self.dialed.append(json.loads(request.content)["addresses"])
            return httpx.Response(200)

        if path == "/swaps" and method == "GET":
            return httpx.Response(200, json={"entities": [self.swap_body(i) for i in self.swaps]})

        created = _CREATE.match(path)
        if created and method == "POST":
            if "halbit" in created.group(1):
                return problem(LIGHTNING_PROBLEM)
            body = json.loads(request.content or b"{}")
            if not body:
                return problem(INVALID_BODY)
            swap_id = self.add_swap(payload=body)
            return httpx.Response(201, headers={"Location": f"/swaps/{swap_id}"})

        matched = _SWAP.match(path)
        if matched is None or matched.group(1) not in self.swaps:
            return problem(SWAP_NOT_FOUND)

        swap_id, rest = matched.group(1), matched.group(2) or ""
        swap = self.swaps[swap_id]

        if rest == "" and method == "GET":
            return httpx.Response(200, json=self.swap_body(swap_id))

        if rest == "/accept" and method == "POST" and swap["state"] == "Start":
            body = json.loads(request.content or b"{}")
            if not body.get("beta_ledger_refund_identity"):
                return problem(INVALID_BODY)
            swap["accept"] = body
            swap["state"] = "Accepted"
            return httpx.Response(200)

        if rest == "/fund" and method == "GET" and swap["state"] == "Accepted":
            if self.instruction_fund:
                # rfc003: the link serves the funding instruction itself
                return httpx.Response(200, json={"address": self.fund_address, "value": "100000000"})
            return httpx.Response(
                200,
                json={
                    "name": "fund",
                    "href": f"/swaps/{swap_id}/fund/execute",
                    "method": "GET",
                    "class": ["bitcoin"],
                },
            )

        if rest == "/fund/execute" and method == "GET" and swap["state"] == "Accepted":
            # cnd "sees" the funding transaction straight away
            swap["state"] = "AlphaFunded"
            return httpx.Response(
                200,
                json={
                    "type": "bitcoin-send-amount-to-address",
                    "payload": {"to": self.fund_address, "amount": "100000000", "network": "regtest"},
                },
            )

        return problem({"status": 404, "title": "Action not found."})


class FakeWallet(WalletProvider):
    def __init__(self, ledger: str, address: str) -> None:
        self.name = f"{ledger}-wallet"
        self.ledger = ledger
        self.address = address
        self.funded: List[int] = []
        self.sent: List[tuple] = []
        self.deployed: List[tuple] = []

    async def fund(self, amount: int) -> None:
        self.funded.append(amount)

    async def send_to_address(self, address: str, amount: int) -> str:
        self.sent.append((address, amount))
        return f"tx-send-{len(self.sent)}"

    async def deploy_contract(self, data: str, value: int, gas_limit: Optional[int] = None) -> str:
        self.deployed.append((data, value, gas_limit))
        return f"tx-deploy-{len(self.deployed)}"

    async def get_address(self) -> str:
        return self.address


@pytest.fixture
def fake_cnd() -> FakeCnd:
    return FakeCnd()


@pytest.fixture
def cnd(fake_cnd: FakeCnd) -> Cnd:
    return fake_cnd.client()


@pytest.fixture
def fast_poll() -> PollConfig:
    return PollConfig(poll_interval_ms=1, timeout_ms=200)


@pytest.fixture
def bitcoin_wallet() -> FakeWallet:
    return FakeWallet("bitcoin", "bcrt1qalicerefund")


@pytest.fixture
def ethereum_wallet() -> FakeWallet:
    return FakeWallet("ethereum", "0x00a329c0648769a73afac7f9381e08fb43dbea72")
