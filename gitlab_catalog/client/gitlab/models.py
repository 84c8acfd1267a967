from typing import Optional

from pydantic import BaseModel, ConfigDict


class GitLabRecord(BaseModel):
    """ Base class of GitLab API records

        Only the commonly used attributes are declared. Other attributes returned by the API are kept as they are.
    """
    model_config = ConfigDict(extra='allow')

    id: int


class GitLabNamespace(GitLabRecord):
    name: Optional[str] = None
    path: Optional[str] = None
    kind: Optional[str] = None
    full_path: Optional[str] = None


class GitLabProject(GitLabRecord):
    """ Project """
    name: Optional[str] = None
    description: Optional[str] = None
    path_with_namespace: Optional[str] = None
    default_branch: Optional[str] = None
    web_url: Optional[str] = None
    archived: Optional[bool] = None
    last_activity_at: Optional[str] = None
    namespace: Optional[GitLabNamespace] = None


class GitLabGroup(GitLabRecord):
    """ Group """
    name: Optional[str] = None
    path: Optional[str] = None
    full_path: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[int] = None
    visibility: Optional[str] = None
    web_url: Optional[str] = None


class GitLabUser(GitLabRecord):
    """ User or group member """
    username: Optional[str] = None
    name: Optional[str] = None
    state: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    web_url: Optional[str] = None
    access_level: Optional[int] = None
    """ Only available when the record is a group member """
