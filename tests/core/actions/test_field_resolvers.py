import pytest

from comit_client.core.actions import StaticFieldResolver, WalletFieldResolver, as_resolver
from comit_client.types.siren import FieldHint, FieldKind


class TestFieldHint:
    def test_class_tags_win_over_name(self):
        hint = FieldHint.derive("whatever", ["ethereum", "address"])

        assert hint == FieldHint(FieldKind.ADDRESS, "ethereum")

    @pytest.mark.parametrize(
        "name,kind",
        [
            ("address", FieldKind.ADDRESS),
            ("data", FieldKind.DATA),
            ("value", FieldKind.VALUE),
            ("gas_limit", FieldKind.GAS_LIMIT),
            ("beta_ledger_refund_identity", FieldKind.ADDRESS),
            ("refund_address", FieldKind.ADDRESS),
            ("fee_per_wu", FieldKind.GENERIC),
        ],
    )
    def test_name_fallback(self, name, kind):
        assert FieldHint.derive(name, []).kind is kind

    def test_ledger_without_kind_tag(self):
        hint = FieldHint.derive("fee_per_wu", ["bitcoin", "feePerWU"])

        assert hint.kind is FieldKind.GENERIC
        assert hint.ledger == "bitcoin"


class TestWalletFieldResolver:
    @pytest.mark.asyncio
    async def test_address_from_wallet_of_field_ledger(self, bitcoin_wallet, ethereum_wallet):
        resolver = WalletFieldResolver({"bitcoin": bitcoin_wallet, "ethereum": ethereum_wallet})

        eth = await resolver.resolve("identity", FieldHint(FieldKind.ADDRESS, "ethereum"))
        btc = await resolver.resolve("address", FieldHint(FieldKind.ADDRESS, "bitcoin"))

        assert eth == ethereum_wallet.address
        assert btc == bitcoin_wallet.address

    @pytest.mark.asyncio
    async def test_single_wallet_used_for_untagged_fields(self, ethereum_wallet):
        resolver = WalletFieldResolver({"ethereum": ethereum_wallet})

        value = await resolver.resolve("refund_identity", FieldHint(FieldKind.ADDRESS))

        assert value == ethereum_wallet.address

    @pytest.mark.asyncio
    async def test_ambiguous_wallet_yields_nothing(self, bitcoin_wallet, ethereum_wallet):
        resolver = WalletFieldResolver({"bitcoin": bitcoin_wallet, "ethereum": ethereum_wallet})

        assert await resolver.resolve("address", FieldHint(FieldKind.ADDRESS)) is None

    @pytest.mark.asyncio
    async def test_non_address_fields_only_from_defaults(self, bitcoin_wallet):
        resolver = WalletFieldResolver({"bitcoin": bitcoin_wallet}, defaults={"fee_per_wu": "20"})

        assert await resolver.resolve("fee_per_wu", FieldHint()) == "20"
        assert await resolver.resolve("gas_limit", FieldHint(FieldKind.GAS_LIMIT)) is None


class TestAsResolver:
    @pytest.mark.asyncio
    async def test_none_resolves_nothing(self):
        assert await as_resolver(None).resolve("address", FieldHint()) is None

    def test_resolver_instances_pass_through(self):
        resolver = StaticFieldResolver()

        assert as_resolver(resolver) is resolver

    def test_rejects_non_callables(self):
        with pytest.raises(TypeError):
            as_resolver("0xabc")
