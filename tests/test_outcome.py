"""
Unit tests for the outcome model.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from errorchain import Outcome, OutcomeStatus
from errorchain.core.models.outcome import failure_outcome, success_outcome
from tests.conftest import IoFailure


class TestOutcome:
    """Test success and failure outcomes."""

    def test_success(self):
        outcome = success_outcome(42)
        assert outcome.is_success()
        assert not outcome.is_failure()
        assert outcome.value == 42
        assert outcome.error is None
        assert outcome.kind is None

    def test_success_keeps_value_identity(self):
        value = object()
        assert success_outcome(value).value is value

    def test_failure(self):
        error = IoFailure("disk")
        outcome = failure_outcome(error)
        assert outcome.is_failure()
        assert outcome.status == OutcomeStatus.FAILURE
        assert outcome.error is error
        assert outcome.kind is IoFailure
        assert outcome.value is None

    def test_failure_requires_error(self):
        with pytest.raises(PydanticValidationError):
            Outcome(status=OutcomeStatus.FAILURE)

    def test_success_rejects_error(self):
        with pytest.raises(PydanticValidationError):
            Outcome(status=OutcomeStatus.SUCCESS, error=IoFailure())

    def test_error_must_be_exception(self):
        with pytest.raises(PydanticValidationError):
            Outcome(status=OutcomeStatus.FAILURE, error="disk")

    def test_is_frozen(self):
        outcome = success_outcome(1)
        with pytest.raises(PydanticValidationError):
            outcome.value = 2

    def test_str(self):
        assert "SUCCESS" in str(success_outcome(1))
        assert "IoFailure" in str(failure_outcome(IoFailure()))
