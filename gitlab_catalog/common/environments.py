import json
import logging
import os
from sys import stderr

from typing import Any, Callable, Optional, Set

__reported_keys: Set[str] = set()

# This logger only reports how environment variables are read. It must not depend on
# "gitlab_catalog.common.logger" as that module reads its own settings through this one.
__log_format = '[ %(asctime)s | %(levelname)s ] %(name)s: %(message)s'
__log_level = logging.DEBUG if str(os.getenv('GITLAB_CATALOG_DEBUG') or '').lower() in ['1', 'true'] else logging.INFO

__log_handler = logging.StreamHandler(stderr)
__log_handler.setLevel(__log_level)
__log_handler.setFormatter(logging.Formatter(__log_format))

__env_logger = logging.Logger('environment', level=__log_level)
__env_logger.addHandler(__log_handler)


def __as_boolean(v: str) -> bool:
    return str(v or '').lower() in ['1', 'true', 'yes']


class EnvironmentVariableRequired(RuntimeError):
    def __init__(self, key: str, hint: Optional[str] = None):
        feedback = f'Environment variable required: {key}'

        if hint:
            feedback += f' ({hint})'

        super(EnvironmentVariableRequired, self).__init__(feedback)


def env(key: str,
        default: Any = None,
        required: bool = False,
        transform: Optional[Callable[[str], Any]] = None,
        hint: Optional[str] = None,
        env_type: Optional[str] = None,
        description: Optional[str] = None) -> Any:
    """ Read an environment variable

        The value is passed through ``transform`` when the variable is set. Otherwise, ``default`` is returned.
        Each key is reported once at the debug level.
    """
    if key not in os.environ:
        if required:
            __env_logger.error(f'Missing {(env_type or "var").upper()} "{key}" ({description})')
            raise EnvironmentVariableRequired(key, hint)
        value = default
    else:
        raw_value = os.environ[key]
        value = transform(raw_value) if transform else raw_value

    if key not in __reported_keys:
        __reported_keys.add(key)
        label = f'{(env_type or "env").upper()} "{key}"'
        if description:
            label = f'{label} ({description})'
        __env_logger.debug(f'{label} → {json.dumps(value)}')

    return value


def flag(key: str, description: Optional[str] = None) -> bool:
    return bool(env(key, default=False, transform=__as_boolean, env_type='flag', description=description))
