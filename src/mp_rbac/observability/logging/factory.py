"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from mp_rbac.observability.logging.processors import ComponentProcessor


class JsonLoggerFactory:
    """Configure structlog on top of the stdlib root logger.

    ``json=True`` renders one JSON object per line; ``json=False`` uses the
    structlog console renderer (handy for local development).
    """

    @staticmethod
    def configure(
        level: int | str = logging.INFO,
        *,
        json: bool = True,
        component: str = "mp_rbac",
    ) -> None:
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())

        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            ComponentProcessor(component),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]
        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        renderer: Any = (
            structlog.processors.JSONRenderer()
            if json
            else structlog.dev.ConsoleRenderer(colors=False)
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


__all__ = ["JsonLoggerFactory"]
