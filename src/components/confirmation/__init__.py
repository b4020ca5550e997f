"""
Confirmation component.

Token-based pending → confirmed transition.
"""

from src.components.confirmation.component import run, run_confirm
from src.components.confirmation.models import ConfirmInput, ConfirmOutcome, ConfirmOutput

__all__ = [
    "run",
    "run_confirm",
    "ConfirmInput",
    "ConfirmOutcome",
    "ConfirmOutput",
]
