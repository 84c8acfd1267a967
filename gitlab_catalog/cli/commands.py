from typing import Optional

import click
from imagination import container

from gitlab_catalog.cli.helpers.client_factory import ConfigurationBasedClientFactory
from gitlab_catalog.cli.helpers.command import handle_errors
from gitlab_catalog.cli.helpers.printer import OutputFormat, show_iterator
from gitlab_catalog.client.gitlab.client import GitLabClient


def _get_client() -> GitLabClient:
    factory: ConfigurationBasedClientFactory = container.get(ConfigurationBasedClientFactory)
    return factory.get()


def output_options(command: click.Command):
    command = click.option('-o', '--output',
                           type=click.Choice(OutputFormat.ALL),
                           default=OutputFormat.DEFAULT_FOR_DATA,
                           show_default=True,
                           help='Output format')(command)
    command = click.option('--limit',
                           type=int,
                           required=False,
                           help='The maximum number of items to show')(command)
    return command


@click.command('projects')
@click.argument('target_url')
@click.option('--last-activity-after', required=False, help='Only list the projects active after this ISO 8601 time')
@output_options
@handle_errors
def list_projects(target_url: str, last_activity_after: Optional[str], limit: Optional[int], output: str):
    """ List the projects of the group (including its subgroups) or of the whole instance at TARGET_URL """
    client = _get_client()
    try:
        show_iterator(output, client.list_projects(target_url, last_activity_after=last_activity_after), limit=limit)
    finally:
        client.close()


@click.command('groups')
@click.argument('target_url')
@output_options
@handle_errors
def list_groups(target_url: str, limit: Optional[int], output: str):
    """ List the groups of the GitLab instance at TARGET_URL """
    client = _get_client()
    try:
        show_iterator(output, client.list_groups(target_url), limit=limit)
    finally:
        client.close()


@click.command('users')
@click.argument('target_url')
@click.option('--inherited/--no-inherited', default=True, show_default=True,
              help='Include the members inherited from the ancestor groups')
@click.option('--blocked', is_flag=True, default=False, help='Only list the blocked members')
@output_options
@handle_errors
def list_users(target_url: str, inherited: bool, blocked: bool, limit: Optional[int], output: str):
    """
    List the members of the group at TARGET_URL.

    If TARGET_URL refers to the whole instance, list all active users. This is only available for gitlab.com.
    """
    client = _get_client()
    try:
        show_iterator(output, client.list_users(target_url, inherited=inherited, blocked=blocked), limit=limit)
    finally:
        client.close()
