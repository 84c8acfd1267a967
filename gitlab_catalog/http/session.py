import platform
import sys
from contextlib import AbstractContextManager
from copy import deepcopy
from typing import Any, Dict, List, Optional
from uuid import uuid4

from requests import RequestException, Response, Session

from gitlab_catalog.client.base_exceptions import RequestFailedError, TransportError
from gitlab_catalog.common.logger import get_logger
from gitlab_catalog.constants import __version__


def merge_request_options(*layers: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Merge the layers of request options into one.

    The layers are applied from the first to the last, so the value in a later layer takes precedence over the
    value of the same key in an earlier layer. Nested dictionaries, e.g., "headers", are merged key by key. None
    layers are ignored. The given layers are never modified.
    """
    merged: Dict[str, Any] = dict()

    for layer in layers:
        if not layer:
            continue

        for key, value in layer.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = merge_request_options(merged[key], value)
            else:
                merged[key] = deepcopy(value)

    return merged


class HttpSession(AbstractContextManager):
    def __init__(self,
                 uuid: Optional[str] = None,
                 session: Optional[Session] = None):
        super().__init__()

        self.__id = uuid or str(uuid4())
        self.__logger = get_logger(f'{type(self).__name__}/{self.__id}')
        self.__session: Optional[Session] = session

    @property
    def _session(self) -> Session:
        if not self.__session:
            self.__session = Session()
            self.__session.headers.update({
                'User-Agent': self.generate_http_user_agent()
            })

        return self.__session

    def __enter__(self):
        super().__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        super().__exit__(exc_type, exc_val, exc_tb)
        self.close()

    def submit(self, method: str, url: str, **kwargs) -> Response:
        """ Send the request and return the response as it is if the status indicates success

            :raises RequestFailedError: if the response status is not 2xx
            :raises TransportError: if the request cannot be completed
        """
        http_method = method.lower()
        self.__logger.debug(f'{http_method.upper()} {url}')

        try:
            response: Response = getattr(self._session, http_method)(url, **kwargs)
        except RequestException as e:
            self.__logger.debug(f'{http_method.upper()} {url}: {type(e).__name__}: {e}')
            raise TransportError(url, str(e)) from e

        self.__logger.debug(f'Response/HTTP {response.status_code} ({len(response.content or b"")}B)')

        if not response.ok:
            raise RequestFailedError(url, response.status_code, response.reason)

        return response

    def get(self, url: str, **kwargs) -> Response:
        return self.submit('get', url, **kwargs)

    def close(self):
        if self.__session:
            self.__session.close()
            self.__session = None

    def __del__(self):
        self.close()

    @staticmethod
    def generate_http_user_agent(comments: Optional[List[str]] = None) -> str:
        final_comments = [
            f'Platform/{platform.platform()}',
            'Python/{}.{}.{}'.format(*sys.version_info),
            *(comments or list()),
        ]

        return f'gitlab-catalog-client/{__version__} {" ".join(final_comments)}'.strip()
