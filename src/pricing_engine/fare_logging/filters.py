"""Log filters for coordinate coarsening and default context fields."""

import logging
import re

# "(lon, lat)" as the engine writes points into messages
COORDINATE_PAIR = re.compile(r"\((-?\d{1,3}\.\d+), (-?\d{1,2}\.\d+)\)")


class LocationFilter(logging.Filter):
    """Rounds pickup and dropoff coordinates in log messages.

    Two decimals is roughly a kilometre.
    """

    def __init__(self, decimals: int = 2):
        super().__init__()
        self.decimals = decimals

    def _coarsen(self, match: re.Match[str]) -> str:
        lon, lat = (float(v) for v in match.groups())
        return f"({lon:.{self.decimals}f}, {lat:.{self.decimals}f})"

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str) and "(" in record.msg:
            record.msg = COORDINATE_PAIR.sub(self._coarsen, record.msg)
        return True


class DefaultContextFilter(logging.Filter):
    """Fills context fields the text format expects with "-" when unset."""

    FIELDS = ("correlation_id", "quote_id")

    def filter(self, record: logging.LogRecord) -> bool:
        for field in self.FIELDS:
            if not hasattr(record, field):
                setattr(record, field, "-")
        return True
