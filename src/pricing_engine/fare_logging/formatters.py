"""Log formatters for JSON and human-readable output."""

import json
import logging
from collections.abc import Iterable
from datetime import UTC, datetime

CONTEXT_FIELDS = ("quote_id", "region_id", "vehicle_id", "correlation_id")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with quote context fields when set.

    Unset fields and the "-" placeholder are left out, so a record logged
    outside a quote carries no quote keys.
    """

    def __init__(
        self,
        environment: str = "development",
        context_fields: Iterable[str] = CONTEXT_FIELDS,
    ):
        super().__init__()
        self.environment = environment
        self.context_fields = tuple(context_fields)

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "env": self.environment,
        }

        for field in self.context_fields:
            value = getattr(record, field, None)
            if value is not None and value != "-":
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class DevFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self) -> None:
        super().__init__(
            fmt=(
                "%(asctime)s [%(levelname)8s] [quote=%(quote_id)s corr=%(correlation_id)s] "
                "%(name)s: %(message)s"
            ),
            datefmt="%Y-%m-%d %H:%M:%S",
        )
