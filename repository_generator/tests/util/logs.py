import logging

import structlog


def reset_logging():
    """Undo init_logging: drop the handlers it installed and structlog's configuration."""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    logging.getLogger("repository_generator").setLevel(logging.NOTSET)
    structlog.reset_defaults()
