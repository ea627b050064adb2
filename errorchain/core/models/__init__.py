"""Models for outcomes and chain settings."""

from .outcome import Outcome, OutcomeStatus, success_outcome, failure_outcome
from .settings import ChainSettings

__all__ = [
    "Outcome",
    "OutcomeStatus",
    "success_outcome",
    "failure_outcome",
    "ChainSettings",
]
