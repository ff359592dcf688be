"""Log record formatters."""

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


class SafeFormatter(logging.Formatter):
    """Formatter that never raises on malformed records.

    A record whose ``msg`` and ``args`` do not match is rendered with the raw
    message and arguments instead of losing the log line.
    """

    def format(self, record: logging.LogRecord) -> str:
        try:
            return super().format(record)
        except (TypeError, ValueError):
            record.msg = f"{record.msg} {record.args!r}"
            record.args = None
            return super().format(record)
