from abc import ABC
from typing import Optional
from uuid import uuid4

from gitlab_catalog.common.logger import get_logger
from gitlab_catalog.configuration.models import GitLabIntegrationConfig
from gitlab_catalog.feature_flags import in_global_debug_mode
from gitlab_catalog.http.session import HttpSession


class BaseServiceClient(ABC):
    """ The base class for clients bound to one integration """

    def __init__(self, config: GitLabIntegrationConfig, http_session: Optional[HttpSession] = None):
        self._uuid = str(uuid4())
        self._config = config
        self._logger = get_logger(f'{type(self).__name__}/{self._config.host}'
                                  if in_global_debug_mode
                                  else type(self).__name__)
        self._http_session = http_session

    @property
    def config(self) -> GitLabIntegrationConfig:
        return self._config

    @property
    def url(self):
        """The base URL to the API"""
        return self._config.api_base_url

    @property
    def http_session(self) -> HttpSession:
        if not self._http_session:
            self._http_session = self.create_http_session()
        return self._http_session

    def create_http_session(self) -> HttpSession:
        """Create HTTP session wrapper"""
        return HttpSession(self._uuid)

    def close(self):
        if self._http_session:
            self._http_session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
