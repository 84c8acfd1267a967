import logging
from sys import stderr
from typing import Optional

from gitlab_catalog.common.environments import env
from gitlab_catalog.feature_flags import in_global_debug_mode

logging_format = '[ %(asctime)s | %(levelname)s ] %(name)s: %(message)s'
overriding_logging_level_name = env(
    'GITLAB_CATALOG_LOG_LEVEL',
    description='Default CLI/library log level. In the debug mode, the log level will be overridden to DEBUG',
    required=False
)
default_logging_level = getattr(logging, overriding_logging_level_name) \
    if overriding_logging_level_name in ('DEBUG', 'INFO', 'WARNING', 'ERROR') \
    else logging.WARNING

if in_global_debug_mode:
    default_logging_level = logging.DEBUG

# "requests" logs the connection pool activities through urllib3.
urllib3_logger = logging.getLogger('urllib3')
urllib3_logger.setLevel(default_logging_level)
urllib3_logger.propagate = True


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """ Create a standalone logger writing to STDERR

        The logger does not propagate to the root logger so that the host application's logging
        configuration does not duplicate the output.
    """
    log_level = level or default_logging_level

    handler = logging.StreamHandler(stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(logging_format))

    logger = logging.Logger(name, level=log_level)
    logger.addHandler(handler)
    logger.propagate = False

    return logger
