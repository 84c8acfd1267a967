from functools import wraps
from traceback import print_exc
from typing import Callable

import click

from gitlab_catalog.client.base_exceptions import RequestFailedError
from gitlab_catalog.feature_flags import detailed_error, in_global_debug_mode


def handle_errors(handler: Callable):
    """ Report errors raised by the command handler in the uniform format and exit with status 1

        In the debug mode, errors are not handled so that the full details are visible.
    """

    @wraps(handler)
    def handle_invocation(*args, **kwargs):
        if in_global_debug_mode:
            return handler(*args, **kwargs)

        try:
            return handler(*args, **kwargs)
        except (TypeError, AttributeError, IndexError, KeyError) as e:
            click.secho('Unexpected programming error', fg='red', err=True)
            print_exc()
            raise SystemExit(1) from e
        except click.ClickException:
            raise
        except Exception as e:
            click.secho(f'{type(e).__name__}: ', fg='red', bold=True, nl=False, err=True)
            click.secho(str(e), fg='red', err=True)

            if detailed_error and isinstance(e, RequestFailedError):
                click.secho(f'HTTP {e.status} ({e.status_text})', dim=True, err=True)

            raise SystemExit(1) from e

    return handle_invocation
