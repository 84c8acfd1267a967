from gitlab_catalog.client.base_exceptions import ErrorKind, GitLabClientError, InvalidTargetUrlError, \
    MissingIntegrationError, RequestFailedError, TransportError, UnsupportedOperationError
from gitlab_catalog.client.factory import IntegrationRegistry
from gitlab_catalog.client.gitlab import GitLabClient, GitLabGroup, GitLabInstanceClient, GitLabProject, GitLabUser, \
    parse_group_url
from gitlab_catalog.client.pagination import ListOptions, PagedResponse, list_options_to_query_string, paginated
from gitlab_catalog.configuration.models import GitLabIntegrationConfig
from gitlab_catalog.constants import __version__
