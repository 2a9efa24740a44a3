import logging

import structlog

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.KeyValueRenderer(key_order=["event"]),
]


def get_logger(name: str):
    """
    Structured logger writing through the standard `logging` module.

    Debug events stay silent until the application enables that level for
    `name` or a parent logger. The global structlog setup is left alone.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
