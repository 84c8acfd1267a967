from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from gitlab_catalog.constants import GITLAB_COM_HOST


class GitLabIntegrationConfig(BaseModel):
    """ GitLab Integration """
    host: str = GITLAB_COM_HOST
    """ The host of the GitLab instance, e.g., "gitlab.com" or "gitlab.example.com:8443" (stored in lower case) """

    base_url: Optional[str] = None
    """ The URL of the GitLab web UI

        This must include the sub-path if the instance is installed under one, e.g., https://example.com/gitlab.
        Default to https://{host}.
    """

    api_base_url: Optional[str] = None
    """ The base URL of the REST API, e.g., https://gitlab.com/api/v4. Default to {base_url}/api/v4. """

    token: Optional[str] = None
    """ Personal, group or project access token """

    @model_validator(mode='before')
    @classmethod
    def _normalize_host_and_urls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            host = (data.get('host') or GITLAB_COM_HOST).strip().lower()
            data['host'] = host
            data['base_url'] = (data.get('base_url') or f'https://{host}').rstrip('/')
            data['api_base_url'] = (data.get('api_base_url') or f'{data["base_url"]}/api/v4').rstrip('/')
        return data


class IntegrationsSection(BaseModel):
    gitlab: List[GitLabIntegrationConfig] = Field(default_factory=list)


class Configuration(BaseModel):
    """ Configuration file content """
    version: float = 1

    integrations: IntegrationsSection = Field(default_factory=IntegrationsSection)


def get_gitlab_request_options(config: GitLabIntegrationConfig) -> Dict[str, Any]:
    """ Default options for authenticated requests to the given integration """
    headers: Dict[str, str] = dict()

    if config.token:
        headers['PRIVATE-TOKEN'] = config.token

    return dict(headers=headers)
