"""
Newsletter component.

Fan-out of a newsletter issue to confirmed subscribers.
"""

from src.components.newsletter.component import run, run_publish
from src.components.newsletter.models import PublishInput, PublishOutput
from src.components.newsletter.ports import ConfirmedSubscriberSourcePort

__all__ = [
    "run",
    "run_publish",
    "PublishInput",
    "PublishOutput",
    "ConfirmedSubscriberSourcePort",
]
