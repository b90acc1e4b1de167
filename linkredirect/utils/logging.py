"""JSON logging for the redirect Lambda

`initialize_logging()` runs in the lambda package's `__init__.py`, before any
other logging is done. Every line is one JSON object: the standard fields,
the deployment's app/env stamp, then whatever the call site passed as `extra`:

    {"timestamp": "2026-10-18T12:00:00.000Z", "level": "INFO",
     "logger": "linkredirect.lambdas.redirect_url.app",
     "message": "Redirecting client. Responding with 302.",
     "app": "linkredirect", "env": "prod", "slug": "promo", "event": "REDIRECT_SUCCESS"}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from linkredirect.constants import ENV
from linkredirect.utils.config import app_env, app_name


class JsonFormatter(logging.Formatter):
    """Render each LogRecord as a single JSON line, `extra` fields included"""

    # Attributes every LogRecord carries; anything else came in through `extra`
    RESERVED_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None))) | {'message', 'asctime'}

    def __init__(self, static_fields: dict[str, Any] | None = None):
        super().__init__()
        self.static_fields = dict(static_fields or {})

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            **self.static_fields,
        }
        log.update((key, value) for key, value in vars(record).items() if key not in self.RESERVED_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            log['stack'] = self.formatStack(record.stack_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    static_fields = {'app': app_name(), 'env': app_env()}
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                    'static_fields': {k: v for k, v in static_fields.items() if v is not None},
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper(),
                'handlers': ['stdout'],
            },
        }
    )
