from typing import Optional

import click
from imagination import container

from gitlab_catalog.cli.helpers.command import handle_errors
from gitlab_catalog.cli.helpers.printer import OutputFormat, show_iterator
from gitlab_catalog.configuration.exceptions import ConfigurationError
from gitlab_catalog.configuration.manager import ConfigurationManager
from gitlab_catalog.configuration.models import GitLabIntegrationConfig


def _mask_token(integration: GitLabIntegrationConfig) -> GitLabIntegrationConfig:
    if not integration.token:
        return integration
    return integration.model_copy(update=dict(token='*' * 8))


@click.group('config')
def config_command_group():
    """ Manage the configuration """


@config_command_group.group('integrations')
def integrations_command_group():
    """ Manage the GitLab integrations """


@integrations_command_group.command('list')
@handle_errors
def list_integrations():
    """ List the configured GitLab integrations """
    manager: ConfigurationManager = container.get(ConfigurationManager)
    show_iterator(OutputFormat.YAML, manager.load().integrations.gitlab, transform=_mask_token)


@integrations_command_group.command('add')
@click.argument('host')
@click.option('--token', required=False, help='Access token')
@click.option('--base-url', required=False, help='The URL of the web UI (default: https://HOST)')
@click.option('--api-base-url', required=False, help='The base URL of the REST API (default: BASE_URL/api/v4)')
@handle_errors
def add_integration(host: str, token: Optional[str], base_url: Optional[str], api_base_url: Optional[str]):
    """ Add or replace the GitLab integration for HOST """
    manager: ConfigurationManager = container.get(ConfigurationManager)
    config = manager.load()

    integration = GitLabIntegrationConfig(host=host, token=token, base_url=base_url, api_base_url=api_base_url)
    config.integrations.gitlab = [i for i in config.integrations.gitlab if i.host != integration.host] + [integration]

    manager.save(config)
    click.echo(f'GitLab integration for {integration.host} saved ({integration.api_base_url})')


@integrations_command_group.command('remove')
@click.argument('host')
@handle_errors
def remove_integration(host: str):
    """ Remove the GitLab integration for HOST """
    manager: ConfigurationManager = container.get(ConfigurationManager)
    config = manager.load()

    remaining = [i for i in config.integrations.gitlab if i.host != host.strip().lower()]
    if len(remaining) == len(config.integrations.gitlab):
        raise ConfigurationError(f'No GitLab integration for {host}')

    config.integrations.gitlab = remaining
    manager.save(config)
    click.echo(f'GitLab integration for {host} removed')
