"""Observability – AuditLogger.

A dedicated structured-log sink for authorization decisions.
"""
from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from mp_rbac.observability.logging.processors import get_logger


class AuditOutcome(str, Enum):
    """Standardised audit outcomes."""

    ALLOWED = "allowed"
    DENIED = "denied"
    UNAUTHENTICATED = "unauthenticated"


class AuditLogger:
    """Structured-log sink for security-sensitive decisions.

    All audit entries are emitted at ``WARNING`` level so they pass through
    even restrictive log-level filters.

    Parameters
    ----------
    service:
        Logical service name injected into every audit entry.
    logger:
        Underlying logger.  Defaults to a structlog logger named ``audit``.
    """

    def __init__(
        self,
        service: str = "unknown",
        logger: Any = None,
    ) -> None:
        self._service = service
        self._log = logger if logger is not None else get_logger("audit")

    def log_decision(
        self,
        principal: Any,
        target: str,
        kind: str,
        outcome: AuditOutcome | str,
        **extra: Any,
    ) -> None:
        """Record an authorization decision.

        Parameters
        ----------
        principal:
            The principal that was evaluated, or ``None`` when none was
            active.  Uses ``principal.id`` if available.
        target:
            Permission or role id that was required.
        kind:
            ``"permission"`` or ``"role"``.
        outcome:
            :class:`AuditOutcome` or plain string.
        """
        principal_id = None
        if principal is not None:
            principal_id = getattr(principal, "id", None) or str(principal)
        entry: dict[str, Any] = {
            "service": self._service,
            "principal_id": principal_id,
            "kind": kind,
            "target": target,
            "outcome": outcome.value if isinstance(outcome, AuditOutcome) else str(outcome),
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            **extra,
        }
        self._log.warning("audit.authorization", **entry)


__all__ = ["AuditLogger", "AuditOutcome"]
