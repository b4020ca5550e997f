# Ports shared across components (Protocol interfaces)
# Abstract interfaces for adapters; no implementations here

from src.core.ports.email import (
    EmailGatewayPort,
    EmailResult,
    EmailStatus,
)

__all__ = [
    "EmailGatewayPort",
    "EmailResult",
    "EmailStatus",
]
