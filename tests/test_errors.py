"""Tests for mapping web3 failures to API errors."""

from web3.exceptions import ContractLogicError, Web3Exception

from icmbridge.contract.errors import (
    AdminAccessError,
    BridgeError,
    ContractCallError,
    GasEstimationError,
    InsufficientFundsError,
    InvalidParameterError,
    SignerNotConfiguredError,
    classify_error,
)


class TestClassifyError:
    def test_revert_keeps_reason(self):
        error = classify_error(ContractLogicError("execution reverted: Token not whitelisted"))

        assert isinstance(error, ContractCallError)
        assert error.status_code == 400
        assert error.message == "Contract call failed: execution reverted: Token not whitelisted"

    def test_revert_during_estimate_is_still_a_revert(self):
        error = classify_error(ContractLogicError("execution reverted"), during_estimate=True)
        assert isinstance(error, ContractCallError)

    def test_insufficient_funds(self):
        error = classify_error(
            ValueError({"code": -32000, "message": "insufficient funds for gas * price + value"})
        )

        assert isinstance(error, InsufficientFundsError)
        assert error.message == "Insufficient funds for transaction"
        assert "insufficient funds" in error.details

    def test_estimate_failure(self):
        error = classify_error(Web3Exception("gas required exceeds allowance"), during_estimate=True)

        assert isinstance(error, GasEstimationError)
        assert error.message == "Transaction would fail - check parameters"

    def test_unknown_failure(self):
        error = classify_error(RuntimeError("connection reset"))

        assert type(error) is BridgeError
        assert error.status_code == 500
        assert error.message == "Internal server error"
        assert error.details == "connection reset"

    def test_bridge_error_passes_through(self):
        original = InvalidParameterError("Invalid amount")
        assert classify_error(original) is original


class TestErrorBodies:
    def test_to_dict_with_details(self):
        body = InvalidParameterError("Invalid chain identifier", details="too long").to_dict()
        assert body == {"success": False, "error": "Invalid chain identifier", "details": "too long"}

    def test_to_dict_without_details(self):
        assert SignerNotConfiguredError().to_dict() == {
            "success": False,
            "error": "Admin wallet not configured",
        }

    def test_statuses(self):
        assert SignerNotConfiguredError.status_code == 400
        assert AdminAccessError.status_code == 401
        assert AdminAccessError().message == "Admin access not configured"
