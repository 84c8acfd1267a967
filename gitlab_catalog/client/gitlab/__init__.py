from gitlab_catalog.client.gitlab.client import GitLabClient, GitLabInstanceClient
from gitlab_catalog.client.gitlab.models import GitLabGroup, GitLabProject, GitLabUser
from gitlab_catalog.client.gitlab.url import parse_group_url
