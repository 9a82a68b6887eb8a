"""
Module 01 - Schema Unit Tests
Tests for core/schemas/artifacts.py, errors.py, versioning.py and verification.py
"""
import pytest
from pydantic import ValidationError

from core.schemas.artifacts import ClaimBundle, EpochMetadata
from core.schemas.errors import (
    ClaimRootError,
    ClaimRootException,
    ErrorCodes,
    InputValidationException,
)
from core.schemas.verification import CheckResult, VerificationResult
from core.schemas.versioning import (
    ENCODING_VERSION,
    UnsupportedEncodingVersionError,
    assert_supported_encoding_version,
)


HASH = "0x" + "ab" * 32


class TestClaimBundle:
    """Shape of claims/<chain>/<address>.json"""

    def test_json_keys_use_wire_names(self):
        bundle = ClaimBundle(epoch_id=3, amount="10", generated_loss="2", proof=[HASH])
        assert bundle.to_json_dict() == {
            "epochId": 3,
            "amount": "10",
            "generatedLoss": "2",
            "proof": [HASH],
        }

    def test_load_from_wire_names(self):
        bundle = ClaimBundle.model_validate(
            {"epochId": 3, "amount": "10", "generatedLoss": "2", "proof": []}
        )
        assert bundle.generated_loss == "2"

    def test_large_amount_kept_exact(self):
        big = str(2**255 + 1)
        assert ClaimBundle(epoch_id=1, amount=big, generated_loss="0").amount == big

    def test_proof_lowercased(self):
        bundle = ClaimBundle(epoch_id=1, amount="0", generated_loss="0", proof=[HASH.upper().replace("0X", "0x")])
        assert bundle.proof == [HASH]

    @pytest.mark.parametrize("amount", ["-1", "1.5", "", "0x10"])
    def test_bad_amount(self, amount):
        with pytest.raises(ValidationError):
            ClaimBundle(epoch_id=1, amount=amount, generated_loss="0")

    def test_bad_proof_element(self):
        with pytest.raises(ValidationError):
            ClaimBundle(epoch_id=1, amount="0", generated_loss="0", proof=["0x1234"])

    def test_epoch_must_be_positive(self):
        with pytest.raises(ValidationError):
            ClaimBundle(epoch_id=0, amount="0", generated_loss="0")


class TestEpochMetadata:
    """Shape of epochs/<chain>/<epoch>.json"""

    def make(self, **overrides):
        data = dict(
            chain_id=8453,
            epoch_id=2,
            merkle_root=HASH,
            count=4,
            total_amount="1000",
            total_generated_loss="10",
        )
        data.update(overrides)
        return EpochMetadata(**data)

    def test_json_omits_unset_optionals(self):
        data = self.make().to_json_dict()
        assert "input" not in data
        assert "generatedAt" not in data
        assert data["merkleRoot"] == HASH
        assert data["encodingVersion"] == ENCODING_VERSION

    def test_json_includes_input_and_timestamp(self):
        data = self.make(input="inputs/8453/epoch-2.csv", generated_at="2026-01-01T00:00:00.000Z").to_json_dict()
        assert data["input"] == "inputs/8453/epoch-2.csv"
        assert data["generatedAt"] == "2026-01-01T00:00:00.000Z"

    def test_count_must_be_positive(self):
        with pytest.raises(ValidationError):
            self.make(count=0)

    def test_bad_root(self):
        with pytest.raises(ValidationError):
            self.make(merkle_root="0x00")


class TestErrors:
    """Structured exceptions."""

    def test_to_error_model(self):
        exc = InputValidationException("Bad amount on line 3: x", line=3, field_path="amount")
        model = exc.to_error_model()

        assert isinstance(model, ClaimRootError)
        assert model.code == ErrorCodes.INPUT_VALIDATION_ERROR
        assert model.details == {"line": 3, "field_path": "amount"}
        assert exc.line == 3

    def test_error_model_round_trip(self):
        exc = ClaimRootError(code=ErrorCodes.ROOT_MISMATCH, message="nope").to_exception()
        assert isinstance(exc, ClaimRootException)
        assert exc.code == ErrorCodes.ROOT_MISMATCH


class TestVersioning:
    def test_current_version_supported(self):
        assert_supported_encoding_version(ENCODING_VERSION)

    def test_unknown_version(self):
        with pytest.raises(UnsupportedEncodingVersionError, match="v9"):
            assert_supported_encoding_version("v9")


class TestVerificationResult:
    def test_from_checks(self):
        result = VerificationResult.from_checks([
            CheckResult.passed("a"),
            CheckResult.failed("b", "broken"),
        ])
        assert not result.ok
        assert result.error_count == 1
        assert result.get_error_messages() == ["broken"]

    def test_add_check_flips_ok(self):
        result = VerificationResult(ok=True)
        result.add_check(CheckResult.passed("a"))
        assert result.ok
        result.add_check(CheckResult.failed("b", "broken"))
        assert not result.ok
