from enum import Enum
from typing import Optional

from gitlab_catalog.configuration.exceptions import ConfigurationError
from gitlab_catalog.feature_flags import detailed_error, in_global_debug_mode


class ErrorKind(str, Enum):
    CONFIGURATION_MISSING = 'configuration-missing'
    UNSUPPORTED_OPERATION = 'unsupported-operation'
    REQUEST_FAILED = 'request-failed'
    TRANSPORT_FAILED = 'transport-failed'
    INVALID_TARGET_URL = 'invalid-target-url'


class GitLabClientError(RuntimeError):
    """ The base class of all errors raised by the GitLab client

        Callers may branch on ``kind`` instead of parsing the message.
    """
    kind: ErrorKind


class MissingIntegrationError(GitLabClientError, ConfigurationError):
    """ Raised when no GitLab integration is configured for the requested URL """
    kind = ErrorKind.CONFIGURATION_MISSING

    def __init__(self, url: str):
        super(MissingIntegrationError, self).__init__(
            f'No GitLab integration found for URL {url}. '
            'Please add a configuration entry for it under "integrations.gitlab".'
        )
        self.__url = url

    @property
    def url(self):
        return self.__url


class UnsupportedOperationError(GitLabClientError):
    """ Raised when the requested operation is not available for the resolved GitLab host """
    kind = ErrorKind.UNSUPPORTED_OPERATION


class RequestFailedError(GitLabClientError):
    """ Raised when GitLab responds with a non-success status """
    kind = ErrorKind.REQUEST_FAILED

    def __init__(self, url: str, status: int, status_text: Optional[str] = None, expected_status: int = 200):
        super(RequestFailedError, self).__init__(url, status, status_text, expected_status)

    @property
    def url(self) -> str:
        return self.args[0]

    @property
    def status(self) -> int:
        return self.args[1]

    @property
    def status_text(self) -> Optional[str]:
        return self.args[2]

    @property
    def expected_status(self) -> int:
        return self.args[3]

    def __str__(self):
        feedback = (f'Unexpected response when fetching {self.url}. '
                    f'Expected {self.expected_status} but got {self.status} - {self.status_text or "(no status text)"}')

        if in_global_debug_mode or detailed_error:
            feedback += f'\n\nURL:\n → {self.url}'

        return feedback


class TransportError(GitLabClientError):
    """ Raised when the request cannot be completed or the response body cannot be decoded

        The original exception is available as ``__cause__``.
    """
    kind = ErrorKind.TRANSPORT_FAILED

    def __init__(self, url: str, reason: str):
        super(TransportError, self).__init__(f'Failed to fetch {url}: {reason}')
        self.__url = url

    @property
    def url(self):
        return self.__url


class InvalidTargetUrlError(GitLabClientError, ValueError):
    """ Raised when the target URL is neither a GitLab group URL nor the URL of the whole instance """
    kind = ErrorKind.INVALID_TARGET_URL
