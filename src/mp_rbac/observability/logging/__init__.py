"""Observability – structured logging helpers."""
from mp_rbac.observability.logging.audit import AuditLogger, AuditOutcome
from mp_rbac.observability.logging.factory import JsonLoggerFactory
from mp_rbac.observability.logging.processors import ComponentProcessor, get_logger

__all__ = [
    "AuditLogger",
    "AuditOutcome",
    "ComponentProcessor",
    "JsonLoggerFactory",
    "get_logger",
]
