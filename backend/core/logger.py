# core/logger.py
import json
import logging
import os

from contextvars import ContextVar
from logging import LogRecord
from logging.handlers import RotatingFileHandler

from core.settings import settings

request_id_ctx_var = ContextVar("request_id", default=None)

# export environment variables
LOG_DIR = settings.LOG_DIR
LOG_LEVEL = settings.LOG_LEVEL.upper()
LOG_FILE = os.path.join(LOG_DIR, "api.log")
MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 5

class JsonFormatter(logging.Formatter):
    def format(self, record: LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if getattr(record, "request_id", None):
            log_entry["request_id"] = record.request_id
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)

class RequestIdFilter(logging.Filter):
    def filter(self, record: LogRecord) -> bool:
        record.request_id = request_id_ctx_var.get()
        return True

def get_logger(name: str) -> logging.Logger:
    """
    Return a logger writing plain lines to the console and JSON lines to a
    rotating file, tagged with the id of the request being served.
    """
    os.makedirs(LOG_DIR, exist_ok=True)

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger  # Already configured

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(levelname)s %(name)s - %(message)s")
    )
    console_handler.setLevel(LOG_LEVEL)
    logger.addHandler(console_handler)

    file_handler = RotatingFileHandler(LOG_FILE, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT)
    file_handler.setFormatter(JsonFormatter())
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)

    logger.addFilter(RequestIdFilter())

    return logger
