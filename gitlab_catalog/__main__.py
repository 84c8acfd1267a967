import sys

import click

from gitlab_catalog.cli.commands import list_groups, list_projects, list_users
from gitlab_catalog.cli.config import config_command_group
from gitlab_catalog.common.logger import get_logger
from gitlab_catalog.constants import __version__

APP_NAME = 'gitlab-catalog'

__python_version = str(sys.version).replace("\n", " ")
__app_signature = f'{APP_NAME} {__version__} with Python {__python_version}'


@click.group(APP_NAME)
@click.version_option(__version__, message="%(version)s")
def gitlab_catalog():
    """
    GitLab Catalog CLI

    List the projects, groups and users of the configured GitLab instances.
    """
    get_logger(APP_NAME).debug(__app_signature)


@gitlab_catalog.command()
def version():
    """ Show the version of CLI/library """
    click.echo(__app_signature)


# noinspection PyTypeChecker
gitlab_catalog.add_command(list_projects)
# noinspection PyTypeChecker
gitlab_catalog.add_command(list_groups)
# noinspection PyTypeChecker
gitlab_catalog.add_command(list_users)
# noinspection PyTypeChecker
gitlab_catalog.add_command(config_command_group)

if __name__ == "__main__":
    gitlab_catalog.main(prog_name=APP_NAME)
