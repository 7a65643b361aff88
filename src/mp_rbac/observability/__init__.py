"""Observability – logging."""
from mp_rbac.observability.logging import (
    AuditLogger,
    AuditOutcome,
    ComponentProcessor,
    JsonLoggerFactory,
    get_logger,
)

__all__ = [
    "AuditLogger",
    "AuditOutcome",
    "ComponentProcessor",
    "JsonLoggerFactory",
    "get_logger",
]
