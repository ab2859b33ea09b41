"""Structured logging for trip API calls."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredApiLogger:
    """Structured logger for remote trip API calls."""

    def log_call(
        self,
        operation: str,
        outcome: str,
        latency_ms: float,
        trip_id: str | None = None,
        status_code: int | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a trip API call with structured data."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if trip_id is not None:
            log_data["trip_id"] = trip_id
        if status_code is not None:
            log_data["status_code"] = status_code
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Trip API call: {operation} - {outcome}"

        if outcome in ("success", "not_found"):
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
