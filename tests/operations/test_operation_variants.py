"""
Unit tests for operation variants.

Tests the registry, each variant's wire body and the field rules every
variant enforces before a transaction is built.
"""

import pytest

from stellar_txnbuild.codec.xdr import OperationType, Price, SignerKeyType
from stellar_txnbuild.runtime.errors import EncodingError, ValidationError, ErrorCode
from stellar_txnbuild.tx.asset import CreditAsset, NativeAsset
from stellar_txnbuild.tx.operations import (
    OPERATION_REGISTRY, Operation, lookup_operation,
    AccountFlag, AccountSigner, AccountMerge, AllowTrust, BumpSequence, ChangeTrust, CreateAccount,
    CreatePassiveOffer, Inflation, ManageData, ManageOffer, PathPayment, Payment, SetOptions,
    create_offer_op, delete_offer_op, remove_trustline_op, update_offer_op,
)

ALICE = "GDQNY3PBOJOKYZSRMK2S7LHHGWZIUISD4QORETLMXEWXBI7KFZZMKTL3"
BOB = "GAS4V4O2B7DW5T7IQRPEEVCRXMDZESKISR7DVIGKZQYYV3OSQ5SH5LVP"
ABCD = CreditAsset("ABCD", BOB)


# =============================================================================
# Registry Tests
# =============================================================================

class TestRegistry:
    """Tests for the operation registry."""

    def test_every_operation_type_is_registered(self):
        assert set(OPERATION_REGISTRY) == set(OperationType)

    @pytest.mark.parametrize("op_type,cls", [
        (OperationType.CREATE_ACCOUNT, CreateAccount),
        (OperationType.PAYMENT, Payment),
        (OperationType.PATH_PAYMENT, PathPayment),
        (OperationType.MANAGE_OFFER, ManageOffer),
        (OperationType.CREATE_PASSIVE_OFFER, CreatePassiveOffer),
        (OperationType.SET_OPTIONS, SetOptions),
        (OperationType.CHANGE_TRUST, ChangeTrust),
        (OperationType.ALLOW_TRUST, AllowTrust),
        (OperationType.ACCOUNT_MERGE, AccountMerge),
        (OperationType.INFLATION, Inflation),
        (OperationType.MANAGE_DATA, ManageData),
        (OperationType.BUMP_SEQUENCE, BumpSequence),
    ])
    def test_lookup(self, op_type, cls):
        assert lookup_operation(op_type) is cls
        assert lookup_operation(int(op_type)) is cls

    def test_lookup_unknown(self):
        with pytest.raises(ValidationError):
            lookup_operation(99)

    def test_duplicate_registration_is_rejected(self):
        with pytest.raises(TypeError, match="already registered"):
            class SecondInflation(Operation):
                operation_type = OperationType.INFLATION

                def build_body(self):
                    return None

        assert OPERATION_REGISTRY[OperationType.INFLATION] is Inflation

    def test_kind_is_class_name(self):
        assert Payment().kind == "Payment"


class TestSourceAccount:
    """Tests for the per-operation source account."""

    def test_absent_by_default(self):
        assert Inflation().build_xdr().source_account is None

    def test_override(self):
        op = Inflation(source_account=BOB).build_xdr()
        assert op.source_account.to_address() == BOB

    def test_invalid_override(self):
        with pytest.raises(EncodingError, match="failed to set source account address"):
            Inflation(source_account="GNOPE").build_xdr()


# =============================================================================
# Account operations
# =============================================================================

class TestCreateAccount:

    def test_body(self):
        body = CreateAccount(destination=BOB, amount="10").build_body()
        assert body.destination.to_address() == BOB
        assert body.starting_balance == 100_000_000

    def test_invalid_destination(self):
        with pytest.raises(EncodingError, match="failed to set destination address"):
            CreateAccount(destination="GABC", amount="10").build_body()

    def test_invalid_amount(self):
        with pytest.raises(ValidationError, match="failed to parse starting balance"):
            CreateAccount(destination=BOB, amount="-10").build_body()


class TestAccountMerge:

    def test_body_is_bare_destination(self):
        op = AccountMerge(destination=BOB).build_xdr()
        assert op.type == OperationType.ACCOUNT_MERGE
        assert op.body.to_address() == BOB


class TestInflation:

    def test_no_body(self):
        op = Inflation().build_xdr()
        assert op.type == OperationType.INFLATION
        assert op.body is None


class TestSetOptions:

    def test_empty_sets_nothing(self):
        body = SetOptions().build_body()
        assert body.inflation_dest is None
        assert body.set_flags is None
        assert body.home_domain is None
        assert body.signer is None

    def test_flags_from_list_or_int(self):
        from_list = SetOptions(set_flags=[AccountFlag.AUTH_REQUIRED, AccountFlag.AUTH_REVOCABLE]).build_body()
        from_int = SetOptions(set_flags=3).build_body()
        assert from_list.set_flags == from_int.set_flags == 3

    def test_clear_immutable_flag(self):
        body = SetOptions(clear_flags=[AccountFlag.AUTH_IMMUTABLE]).build_body()
        assert body.clear_flags == 4

    @pytest.mark.parametrize("field_name", ["set_flags", "clear_flags"])
    @pytest.mark.parametrize("value", [-1, 2**32, 2**40])
    def test_flags_out_of_uint32_range(self, field_name, value):
        with pytest.raises(ValidationError, match=field_name.replace("_", " ")):
            SetOptions(**{field_name: value}).build_body()

    def test_flags_at_uint32_limit(self):
        assert SetOptions(set_flags=2**32 - 1).build_body().set_flags == 2**32 - 1

    def test_thresholds(self):
        body = SetOptions(master_weight=10, low_threshold=1, medium_threshold=2, high_threshold=3).build_body()
        assert (body.master_weight, body.low_threshold, body.med_threshold, body.high_threshold) == (10, 1, 2, 3)

    @pytest.mark.parametrize("field_name", ["master_weight", "low_threshold", "medium_threshold", "high_threshold"])
    @pytest.mark.parametrize("value", [-1, 256])
    def test_weight_out_of_range(self, field_name, value):
        with pytest.raises(ValidationError):
            SetOptions(**{field_name: value}).build_body()

    def test_signer(self):
        body = SetOptions(signer=AccountSigner(address=BOB, weight=4)).build_body()
        assert body.signer.key.type == SignerKeyType.ED25519
        assert body.signer.weight == 4

    def test_signer_weight_zero_removes(self):
        body = SetOptions(signer=AccountSigner(address=BOB, weight=0)).build_body()
        assert body.signer.weight == 0

    def test_home_domain_limit(self):
        SetOptions(home_domain="a" * 32).build_body()
        with pytest.raises(ValidationError, match="home domain is 34 bytes"):
            SetOptions(home_domain="LovelyLumensLookLuminousLately.com").build_body()


class TestManageData:

    def test_set(self):
        body = ManageData(name="Fruit preference", value=b"Apple").build_body()
        assert body.data_name == "Fruit preference"
        assert body.data_value == b"Apple"

    def test_remove(self):
        assert ManageData(name="Fruit preference").build_body().data_value is None

    @pytest.mark.parametrize("name", ["", "n" * 65])
    def test_name_length(self, name):
        with pytest.raises(ValidationError):
            ManageData(name=name, value=b"x").build_body()

    def test_value_length(self):
        ManageData(name="k", value=b"v" * 64).build_body()
        with pytest.raises(ValidationError):
            ManageData(name="k", value=b"v" * 65).build_body()


class TestBumpSequence:

    def test_body(self):
        assert BumpSequence(bump_to=9606132444168300).build_body().bump_to == 9606132444168300

    @pytest.mark.parametrize("bump_to", [-1, 2**63, "5"])
    def test_out_of_range(self, bump_to):
        with pytest.raises(ValidationError):
            BumpSequence(bump_to=bump_to).build_body()


# =============================================================================
# Payment operations
# =============================================================================

class TestPayment:

    def test_body(self):
        body = Payment(destination=BOB, amount="10", asset=NativeAsset()).build_body()
        assert body.destination.to_address() == BOB
        assert body.amount == 100_000_000

    def test_missing_asset(self):
        with pytest.raises(ValidationError) as exc_info:
            Payment(destination=BOB, amount="10").build_body()
        assert exc_info.value.message == "you must specify an asset for payment"
        assert exc_info.value.code == ErrorCode.INVALID_ASSET


class TestPathPayment:

    def test_body(self):
        body = PathPayment(
            send_asset=NativeAsset(), send_max="10", destination=ALICE,
            dest_asset=NativeAsset(), dest_amount="1", path=[ABCD],
        ).build_body()
        assert body.send_max == 100_000_000
        assert body.dest_amount == 10_000_000
        assert len(body.path) == 1

    def test_path_limit(self):
        op = PathPayment(
            send_asset=NativeAsset(), send_max="10", destination=ALICE,
            dest_asset=NativeAsset(), dest_amount="1", path=[ABCD] * 6,
        )
        with pytest.raises(ValidationError):
            op.build_body()

    def test_missing_assets(self):
        with pytest.raises(ValidationError):
            PathPayment(send_max="10", destination=ALICE, dest_asset=NativeAsset(), dest_amount="1").build_body()


# =============================================================================
# Trust operations
# =============================================================================

class TestChangeTrust:

    def test_default_limit_is_max(self):
        assert ChangeTrust(line=ABCD).build_body().limit == 2**63 - 1

    def test_limit(self):
        assert ChangeTrust(line=ABCD, limit="10").build_body().limit == 100_000_000

    def test_native_rejected(self):
        with pytest.raises(ValidationError, match="native"):
            ChangeTrust(line=NativeAsset()).build_body()

    def test_remove_trustline(self):
        op = remove_trustline_op(ABCD, source_account=ALICE)
        assert op.limit == "0"
        assert op.source_account == ALICE
        assert op.build_body().limit == 0


class TestAllowTrust:

    def test_body(self):
        body = AllowTrust(trustor=ALICE, type=ABCD, authorize=True).build_body()
        assert body.trustor.to_address() == ALICE
        assert body.asset.code == b"ABCD"
        assert body.authorize is True

    def test_native_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            AllowTrust(trustor=ALICE, type=NativeAsset(), authorize=True).build_body()
        assert exc_info.value.message == "trustline doesn't exist for a native (XLM) asset"


# =============================================================================
# Offer operations
# =============================================================================

class TestOffers:

    def test_create_offer(self):
        op = create_offer_op(NativeAsset(), ABCD, "100", "0.01")
        body = op.build_body()
        assert body.offer_id == 0
        assert body.amount == 1_000_000_000
        assert body.price == Price(1, 100)

    def test_update_offer(self):
        body = update_offer_op(NativeAsset(), ABCD, "50", "0.02", 2497628).build_body()
        assert body.offer_id == 2497628
        assert body.price == Price(1, 50)

    def test_update_offer_requires_id(self):
        with pytest.raises(ValidationError):
            update_offer_op(NativeAsset(), ABCD, "50", "0.02", 0)

    def test_delete_offer(self):
        body = delete_offer_op(2921622).build_body()
        assert body.offer_id == 2921622
        assert body.amount == 0
        assert body.price == Price(1, 1)

    def test_invalid_price(self):
        with pytest.raises(ValidationError, match="failed to parse price"):
            create_offer_op(NativeAsset(), ABCD, "1", "0").build_body()

    def test_passive_offer(self):
        body = CreatePassiveOffer(selling=NativeAsset(), buying=ABCD, amount="10", price="1.0").build_body()
        assert body.amount == 100_000_000
        assert body.price == Price(1, 1)

    def test_missing_buying_asset(self):
        with pytest.raises(ValidationError):
            ManageOffer(selling=NativeAsset(), amount="1", price="1").build_body()
