import json
import logging
from typing import Any, Dict, List, Optional
from unittest import TestCase
from unittest.mock import MagicMock

from requests import Response, Session

from gitlab_catalog.client.factory import IntegrationRegistry
from gitlab_catalog.client.gitlab.client import GitLabClient
from gitlab_catalog.common.logger import get_logger
from gitlab_catalog.configuration.models import GitLabIntegrationConfig
from gitlab_catalog.feature_flags import in_global_debug_mode
from gitlab_catalog.http.session import HttpSession


def make_response(body: Any = None,
                  status_code: int = 200,
                  reason: str = 'OK',
                  headers: Optional[Dict[str, str]] = None,
                  raw_body: Optional[bytes] = None) -> Response:
    """ Create a real "requests" response without the network """
    response = Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = 'utf-8'
    response._content = raw_body if raw_body is not None else json.dumps(body if body is not None else []).encode()
    response.headers.update(headers or dict())
    return response


def make_page(items: List[Dict[str, Any]], next_page: Optional[int] = None) -> Response:
    return make_response(items, headers={'X-Next-Page': str(next_page) if next_page else ''})


class BaseTestCase(TestCase):
    integrations = [
        GitLabIntegrationConfig(host='gitlab.com', token='gitlab-com-token'),
        GitLabIntegrationConfig(host='gitlab.example.com', token='self-managed-token'),
        GitLabIntegrationConfig(host='example.org', base_url='https://example.org/gitlab'),
    ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._logger = get_logger(f'{type(self).__name__}', logging.DEBUG if in_global_debug_mode else logging.INFO)

    def setUp(self) -> None:
        self.session_mock = MagicMock(Session)
        self.registry = IntegrationRegistry(self.integrations)
        self.client = GitLabClient(self.registry, HttpSession(session=self.session_mock))

    def respond_with(self, *responses: Any):
        self.session_mock.get.side_effect = list(responses)

    def requested_urls(self) -> List[str]:
        return [c.args[0] for c in self.session_mock.get.call_args_list]
