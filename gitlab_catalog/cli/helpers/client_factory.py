from imagination.decorator import service

from gitlab_catalog.client.factory import IntegrationRegistry
from gitlab_catalog.client.gitlab.client import GitLabClient
from gitlab_catalog.configuration.manager import ConfigurationManager


@service.registered()
class ConfigurationBasedClientFactory:
    """
    Configuration-based Client Factory

    This class will provide the GitLab client based on the CLI configuration.
    """

    def __init__(self, config_manager: ConfigurationManager):
        self._config_manager = config_manager

    def get_registry(self) -> IntegrationRegistry:
        return IntegrationRegistry.from_configuration(self._config_manager.load())

    def get(self) -> GitLabClient:
        return GitLabClient(self.get_registry())
