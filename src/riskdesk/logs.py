import sys
import json
import logging
from datetime import datetime

from riskdesk.config import LOG_LEVEL


class JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def __init__(self, service: str = "riskdesk"):
        super().__init__()
        self.service = service

    def format(self, record):
        log_record = dict(getattr(record, 'extra_data', {}))
        log_record.update({
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service
        })
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


def configure_logging(service: str = "riskdesk", level: str = LOG_LEVEL) -> None:
    """Installs a single stdout JSON handler on the root logger."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(service))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)


def log_event(logger: logging.Logger, msg: str, level: int = logging.INFO, **kwargs):
    logger.log(level, msg, extra={'extra_data': kwargs})
