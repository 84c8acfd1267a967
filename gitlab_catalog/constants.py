import os

__version__ = '0.1.0'

LOCAL_STORAGE_DIRECTORY = os.path.join(os.path.expanduser('~'), '.gitlab-catalog')

GITLAB_COM_HOST = 'gitlab.com'

DEFAULT_PER_PAGE = 100

# GitLab reports the follow-up page number with this header. It is empty on the last page.
NEXT_PAGE_HEADER = 'X-Next-Page'
