from typing import Callable, Dict, Generic, List, Optional, TypeVar, Union
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from gitlab_catalog.client.result_iterator import ResultLoader, ResultIterator

T = TypeVar('T')

ListOptionValue = Union[str, int, float, bool, None]
ListOptions = Dict[str, ListOptionValue]
""" Query parameters of one page request

    "page" holds the page cursor and is updated by the page loader between requests.
    "per_page" holds the page size.
"""


class PagedResponse(BaseModel, Generic[T]):
    """ One page of a paginated collection """
    model_config = ConfigDict(frozen=True)

    items: List[T] = Field(default_factory=list)
    next_page: Optional[int] = None
    """ The number of the next page, or None if this is the last page """


def list_options_to_query_string(options: Optional[ListOptions] = None) -> str:
    """
    Convert the list options to a query string.

    Only truthy values are included. This means that the query string can never contain zero, false or empty values,
    e.g., "page=0" or "blocked=false". The parameters follow the iteration order of the options.

    :return: an empty string if no parameters remain, otherwise the query string with the leading "?"
    """
    parameters = [
        (key, _stringify(value))
        for key, value in (options or dict()).items()
        if value
    ]
    return f'?{urlencode(parameters)}' if parameters else ''


def _stringify(value: ListOptionValue) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class PageLoader(ResultLoader[T]):
    """ Load one page at a time by following the "next page" number reported by each response """

    def __init__(self,
                 fetch_page: Callable[[ListOptions], PagedResponse[T]],
                 options: ListOptions):
        self.__fetch_page = fetch_page
        self.__options = options
        self.__active = True
        self.__fetch_count = 0

    def load(self) -> List[T]:
        self.__fetch_count += 1
        self.logger.debug(f'Fetching page {self.__options.get("page") or 1} (request #{self.__fetch_count})')

        # A failed request deactivates the loader so that no further pages are requested.
        self.__active = False
        response = self.__fetch_page(self.__options)

        self.__options['page'] = response.next_page
        self.__active = bool(response.next_page)

        if not self.__active:
            self.logger.debug(f'Reached the last page after {self.__fetch_count} request(s)')

        return list(response.items)

    def has_more(self) -> bool:
        return self.__active


def paginated(fetch_page: Callable[[ListOptions], PagedResponse[T]],
              options: ListOptions) -> ResultIterator[T]:
    """
    Iterate through every item of a paginated collection.

    The iterator requests the first page on the first call to ``next()`` and the follow-up pages only when the items
    of the previous page are exhausted. Each page request receives ``options`` with "page" set to the next page
    number reported by the previous response. The iteration ends when a response reports no next page.

    The returned iterator cannot be restarted. Call this function again to walk the collection from the first page.

    :param fetch_page: Function which performs one page request, e.g., ``GitLabInstanceClient.paged_request``
    :param options: The initial list options, shared by all page requests
    """
    return ResultIterator(PageLoader(fetch_page, options))
