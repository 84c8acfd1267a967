from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ValidationError
from requests import Response

from gitlab_catalog.client.base_client import BaseServiceClient
from gitlab_catalog.client.base_exceptions import TransportError, UnsupportedOperationError
from gitlab_catalog.client.factory import IntegrationRegistry
from gitlab_catalog.client.gitlab.models import GitLabGroup, GitLabProject, GitLabUser
from gitlab_catalog.client.gitlab.url import parse_group_url
from gitlab_catalog.client.pagination import ListOptions, PagedResponse, list_options_to_query_string, paginated
from gitlab_catalog.client.result_iterator import ResultIterator
from gitlab_catalog.common.logger import get_logger
from gitlab_catalog.configuration.models import get_gitlab_request_options
from gitlab_catalog.constants import DEFAULT_PER_PAGE, GITLAB_COM_HOST, NEXT_PAGE_HEADER
from gitlab_catalog.http.session import HttpSession, merge_request_options

M = TypeVar('M', bound=BaseModel)


def _parse_next_page(value: Optional[str]) -> Optional[int]:
    try:
        next_page = int((value or '').strip())
    except ValueError:
        return None
    return next_page if next_page > 0 else None


class GitLabInstanceClient(BaseServiceClient):
    """ Client for the REST API of one GitLab instance """

    def request(self, endpoint: str, overrides: Optional[Dict[str, Any]] = None) -> Response:
        """
        Perform an authenticated GET request against the GitLab instance.

        The response is returned without modification. The given overrides are merged onto the default
        authenticated request options (see ``get_gitlab_request_options``) and take precedence over them.

        :param endpoint: The relative request endpoint, including the query string, e.g., /user or /projects?page=2
        :param overrides: Keyword arguments for ``requests``, e.g., ``dict(headers={...}, timeout=30)``
        :raises RequestFailedError: if the response status does not indicate success
        :raises TransportError: if the request cannot be completed
        """
        url = f'{self.url}{endpoint}'
        self._logger.debug(f'Fetching: {url}')

        return self.http_session.get(url, **merge_request_options(get_gitlab_request_options(self._config),
                                                                  overrides))

    def paged_request(self,
                      endpoint: str,
                      options: Optional[ListOptions] = None,
                      model: Optional[Type[M]] = None) -> PagedResponse:
        """
        Request one page from a paginated GitLab endpoint.

        The next page number is read from the X-Next-Page header. The result can be walked through with
        ``paginated``.

        :param endpoint: The request endpoint without the query string, e.g., /projects
        :param options: The list options, including the page variables
        :param model: The model of the items. If not given, the items are the decoded JSON objects.
        :raises TransportError: if the body is not a JSON array of the expected items
        """
        query_string = list_options_to_query_string(options)
        response = self.request(f'{endpoint}{query_string}')
        url = f'{self.url}{endpoint}{query_string}'

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(url, f'Unable to decode the response body as JSON ({e})') from e

        if not isinstance(body, list):
            raise TransportError(url, f'Expected a JSON array but got {type(body).__name__}')

        if model:
            try:
                items = [model.model_validate(item) for item in body]
            except ValidationError as e:
                raise TransportError(url, f'Unexpected item for {model.__name__} ({e})') from e
        else:
            items = body

        return PagedResponse(items=items, next_page=_parse_next_page(response.headers.get(NEXT_PAGE_HEADER)))

    def walk(self,
             endpoint: str,
             options: ListOptions,
             model: Optional[Type[M]] = None) -> ResultIterator:
        """ Iterate through every item of the paginated endpoint """
        return paginated(lambda o: self.paged_request(endpoint, o, model), options)


class GitLabClient:
    """
    GitLab catalog client

    Every listing operation resolves the GitLab integration from the target URL. If the URL refers to a group,
    e.g., https://gitlab.com/my-org/my-team, the group-scoped endpoints are used. Otherwise, the instance-wide
    endpoints are used.

    Each listing operation returns an iterator which fetches the pages on demand.
    """

    def __init__(self, registry: IntegrationRegistry, http_session: Optional[HttpSession] = None):
        self._logger = get_logger(type(self).__name__)
        self._registry = registry
        self._http_session = http_session or HttpSession()

    def list_projects(self,
                      target_url: str,
                      last_activity_after: Optional[str] = None) -> ResultIterator[GitLabProject]:
        """
        List the projects of the group (including its subgroups) or of the whole instance.

        :param target_url: The URL of the group or of the instance
        :param last_activity_after: ISO 8601 timestamp to limit the result to the recently active projects
        """
        client = self._get_instance_client(target_url)
        group_full_path = parse_group_url(target_url, client.config.base_url)

        options: ListOptions = dict(per_page=DEFAULT_PER_PAGE)

        if group_full_path:
            endpoint = f'/groups/{quote(group_full_path, safe="")}/projects'
            options['include_subgroups'] = True
        else:
            endpoint = '/projects'

        if last_activity_after:
            options['last_activity_after'] = last_activity_after

        return client.walk(endpoint, options, GitLabProject)

    def list_groups(self, target_url: str) -> ResultIterator[GitLabGroup]:
        """ List the groups of the GitLab instance which the target URL belongs to """
        client = self._get_instance_client(target_url)
        return client.walk('/groups', dict(per_page=DEFAULT_PER_PAGE), GitLabGroup)

    def list_users(self,
                   target_url: str,
                   inherited: bool = True,
                   blocked: bool = False) -> ResultIterator[GitLabUser]:
        """
        List the members of the group or the users of the whole instance.

        :param target_url: The URL of the group or of the instance
        :param inherited: Include the members inherited from the ancestor groups (group URL only)
        :param blocked: Only list the blocked members (group URL only)
        :raises UnsupportedOperationError: if the instance-wide listing is requested for a host other than gitlab.com
        """
        client = self._get_instance_client(target_url)
        group_full_path = parse_group_url(target_url, client.config.base_url)

        if group_full_path:
            endpoint = f'/groups/{quote(group_full_path, safe="")}/members{"/all" if inherited else ""}'
            options: ListOptions = dict(per_page=DEFAULT_PER_PAGE)
            if blocked:
                options['blocked'] = True
            return client.walk(endpoint, options, GitLabUser)

        if client.config.host != GITLAB_COM_HOST:
            raise UnsupportedOperationError(
                f'Listing all users of the instance is only supported for {GITLAB_COM_HOST} '
                f'(requested: {client.config.host}). Use a group URL to list the members of a group instead.'
            )

        return client.walk('/users', dict(active=True, per_page=DEFAULT_PER_PAGE), GitLabUser)

    def close(self):
        self._http_session.close()

    def _get_instance_client(self, target_url: str) -> GitLabInstanceClient:
        integration = self._registry.resolve(target_url)
        self._logger.debug(f'{target_url} → {integration.api_base_url}')
        return GitLabInstanceClient(integration, self._http_session)
