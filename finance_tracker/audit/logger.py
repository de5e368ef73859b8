"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Traceability of what happened to each entry
2. Debugging capability when storage misbehaves
3. A record of rejected input

The audit logger:
- Is synchronous, like the rest of the ledger
- Gracefully handles failures (a logging problem never breaks a mutation)
"""

import logging
import sys

import structlog

from finance_tracker.models.audit import AuditEvent, AuditSeverity


def configure_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of stdlib logging.

    Called once at startup by the factory; tests rely on
    structlog.testing.capture_logs instead.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Writes each event to the structured local log at a level that
    matches its severity.
    """

    def __init__(self, logger_name: str = "finance_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written.
        """
        log_dict = event.to_log_dict()
        event_name = log_dict.pop("event_type")

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error(event_name, **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning(event_name, **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug(event_name, **log_dict)
            else:
                self._logger.info(event_name, **log_dict)
        except Exception as e:
            # Don't raise - auditing should not break the ledger
            logging.getLogger(__name__).warning(
                "Failed to write audit event %s: %s", log_dict["event_id"], e
            )
            return False

        return True
