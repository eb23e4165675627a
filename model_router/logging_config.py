import logging
import logging.config
import os

import structlog

from model_router.config import settings


def configure_logging(level: str | None = None, log_file: str | None = None):
    """
    Configures structlog and standard library logging.
    - Pretty print to console
    - JSON output to a rotating file when settings.log_file is set
    """
    level = level or settings.log_level
    log_file = log_file if log_file is not None else settings.log_file

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers = {
        "console": {
            "level": level,
            "class": "logging.StreamHandler",
            "formatter": "console",
            "stream": "ext://sys.stdout",
        },
    }
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers["file"] = {
            "level": level,
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "formatter": "json",
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
        }
    handler_names = list(handlers)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": structlog.processors.JSONRenderer(),
                "foreign_pre_chain": shared_processors,
            },
            "console": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": structlog.dev.ConsoleRenderer(colors=True),
                "foreign_pre_chain": shared_processors,
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": handler_names,
                "level": level,
                "propagate": True,
            },
            # openai/httpx log every request at INFO
            "httpx": {
                "level": "WARNING",
            },
            "uvicorn.access": {
                "handlers": handler_names,
                "level": level,
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": handler_names,
                "level": level,
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)
