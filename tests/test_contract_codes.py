"""Contract code validation: validator rules and the validate endpoint."""

from datetime import datetime, timedelta, timezone

import pytest

from app.crud.contract_code import ContractCodeCRUD
from app.models.contract_code import check_redeemable, normalize_code
from app.services.membership.contract_codes import ContractCodeValidator
from app.utils.exceptions import (
    ContractCodeExpiredError,
    ContractCodeInactiveError,
    ContractCodeNotFoundError,
    ValidationError,
)

from conftest import utc


@pytest.fixture
def validator(store):
    return ContractCodeValidator(ContractCodeCRUD(store))


def test_normalize_code_trims_and_uppercases():
    assert normalize_code("  gym-0001 \n") == "GYM-0001"


class TestValidator:

    async def test_valid_code_returns_record_with_plan(self, validator, seed_code):
        seed_code(plan_id="elite")
        contract = await validator.validate(" gym-0001 ")
        assert contract.code == "GYM-0001"
        assert contract.plan_id == "elite"

    async def test_unknown_code(self, validator):
        with pytest.raises(ContractCodeNotFoundError) as exc:
            await validator.validate("NOPE")
        assert exc.value.reason == "Contract code not found"
        assert exc.value.message == "Invalid contract code"

    @pytest.mark.parametrize("status", ["USED", "SUSPENDED", "active", None])
    async def test_non_active_status(self, validator, seed_code, status):
        seed_code(status=status)
        with pytest.raises(ContractCodeInactiveError) as exc:
            await validator.validate("GYM-0001")
        assert exc.value.reason == "Contract code is not active"

    async def test_expired_active_code(self, validator, seed_code):
        seed_code(expires_at=datetime.now(timezone.utc) - timedelta(minutes=1))
        with pytest.raises(ContractCodeExpiredError):
            await validator.validate("GYM-0001")

    async def test_expiry_stored_as_iso_string(self, validator, seed_code):
        seed_code(expires_at="2020-01-01T00:00:00Z")
        with pytest.raises(ContractCodeExpiredError):
            await validator.validate("GYM-0001")

    async def test_future_expiry_is_valid(self, validator, seed_code):
        seed_code(expires_at=datetime.now(timezone.utc) + timedelta(days=1))
        contract = await validator.validate("GYM-0001")
        assert contract.expires_at is not None

    def test_inactive_takes_precedence_over_expired(self):
        with pytest.raises(ContractCodeInactiveError):
            check_redeemable("X", {"status": "USED", "expiresAt": utc(2000, 1, 1)})

    def test_naive_expiry_is_treated_as_utc(self):
        contract = check_redeemable(
            "X", {"status": "ACTIVE", "expiresAt": datetime(2030, 1, 1)}, now=utc(2029, 12, 31)
        )
        assert contract.expires_at.tzinfo is not None


class TestValidateEndpoint:

    def test_valid(self, client, seed_code):
        seed_code()
        response = client.post("/api/contract-codes/validate", json={"contractCode": "gym-0001"})
        assert response.status_code == 200
        assert response.json() == {"valid": True}

    def test_missing_code(self, client):
        response = client.post("/api/contract-codes/validate", json={})
        assert response.status_code == 400
        assert response.json() == {"valid": False, "reason": "Contract code is required"}

    def test_not_found(self, client):
        response = client.post("/api/contract-codes/validate", json={"contractCode": "GYM-9999"})
        assert response.status_code == 200
        assert response.json() == {"valid": False, "reason": "Contract code not found"}

    def test_not_active(self, client, seed_code):
        seed_code(status="USED")
        response = client.post("/api/contract-codes/validate", json={"contractCode": "GYM-0001"})
        assert response.json() == {"valid": False, "reason": "Contract code is not active"}

    def test_expired(self, client, seed_code):
        seed_code(expires_at=datetime.now(timezone.utc) - timedelta(days=1))
        response = client.post("/api/contract-codes/validate", json={"contractCode": "GYM-0001"})
        assert response.json() == {"valid": False, "reason": "Contract code expired"}


async def test_blank_code_is_rejected_before_lookup(store):
    class NoLookup(ContractCodeCRUD):
        async def get_raw(self, code):
            raise AssertionError("no lookup expected")

    with pytest.raises(ValidationError) as exc:
        await ContractCodeValidator(NoLookup(store)).validate("   ")
    assert exc.value.message == "Contract code is required"


def test_blank_code_on_endpoint(client):
    response = client.post("/api/contract-codes/validate", json={"contractCode": "   "})
    assert response.status_code == 400
    assert response.json() == {"valid": False, "reason": "Contract code is required"}
