from typing import List, Optional
from urllib.parse import urlparse

from gitlab_catalog.client.base_exceptions import InvalidTargetUrlError


def _get_path_segments(url: str) -> List[str]:
    return [segment for segment in urlparse(url).path.split('/') if segment]


def parse_group_url(url: str, base_url: Optional[str] = None) -> Optional[str]:
    """
    Extract the full path of a GitLab group from the given URL.

    :param url: The target URL, e.g., https://gitlab.com/groups/foo/bar or https://gitlab.com/foo/bar
    :param base_url: The base URL of the GitLab instance. The path of the base URL, if any, is removed from the target
                     URL before it is interpreted, which supports installations under a sub-path.
    :return: The full path of the group, e.g., "foo/bar", or None if the URL refers to the whole instance.
    :raises InvalidTargetUrlError: if the URL is not under the base URL or is not a group URL.
    """
    path = _get_path_segments(url)

    if base_url:
        base_path = _get_path_segments(base_url)
        if path[:len(base_path)] != base_path:
            raise InvalidTargetUrlError(f'The GitLab base URL ({base_url}) is not a prefix of the target URL ({url})')
        path = path[len(base_path):]

    if not path:
        return None

    if path[0] == 'groups':
        path = path[1:]
        if not path:
            raise InvalidTargetUrlError(f'The group URL ({url}) does not name a group')

    # "/-/" marks the start of a reserved route, e.g., /foo/-/issues.
    if '-' in path:
        raise InvalidTargetUrlError(f'The URL ({url}) is not a GitLab group URL')

    return '/'.join(path)
