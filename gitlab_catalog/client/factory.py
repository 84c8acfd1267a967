from typing import Iterable, List, Optional
from urllib.parse import urlparse

from gitlab_catalog.client.base_exceptions import MissingIntegrationError
from gitlab_catalog.common.logger import get_logger
from gitlab_catalog.configuration.models import Configuration, GitLabIntegrationConfig


_DEFAULT_PORTS = dict(http='80', https='443')


def _normalize_host(host: str) -> str:
    return host.strip().lower()


class IntegrationRegistry:
    """ The registry of the known GitLab instances

        An integration matches a URL when its host (including the port, if any) is the host of the URL.
    """

    def __init__(self, integrations: Iterable[GitLabIntegrationConfig]):
        self.__logger = get_logger(f'{type(self).__name__}/{hash(self)}')
        self.__integrations: List[GitLabIntegrationConfig] = list(integrations)

        self.__logger.debug(f'Initialized with {len(self.__integrations)} integration(s)')

    @classmethod
    def from_configuration(cls, configuration: Configuration) -> 'IntegrationRegistry':
        return cls(configuration.integrations.gitlab)

    def all(self) -> List[GitLabIntegrationConfig]:
        return list(self.__integrations)

    def by_host(self, host: str) -> Optional[GitLabIntegrationConfig]:
        normalized_host = _normalize_host(host)
        for integration in self.__integrations:
            if _normalize_host(integration.host) == normalized_host:
                return integration
        return None

    def by_url(self, url: str) -> Optional[GitLabIntegrationConfig]:
        """ Find the integration for the given URL or return None if there is none """
        parsed_url = urlparse(url)
        if not parsed_url.netloc:
            return None

        # Drop the user information, e.g., "user:password@".
        host = _normalize_host(parsed_url.netloc.rsplit('@', 1)[-1])

        default_port = _DEFAULT_PORTS.get(parsed_url.scheme.lower())
        if default_port and host.endswith(f':{default_port}'):
            host = host[:-len(default_port) - 1]

        return self.by_host(host)

    def resolve(self, url: str) -> GitLabIntegrationConfig:
        """ Find the integration for the given URL

            :raises MissingIntegrationError: if no integration is configured for the host of the URL
        """
        integration = self.by_url(url)

        if not integration:
            self.__logger.debug(f'No integration for {url} among {[i.host for i in self.__integrations]}')
            raise MissingIntegrationError(url)

        return integration
