from abc import ABC
from logging import Logger
from threading import Lock
from typing import Generic, List, Optional, TypeVar
from uuid import uuid4

from gitlab_catalog.common.logger import get_logger

T = TypeVar('T')


class ResultLoader(ABC, Generic[T]):
    __uuid__: Optional[str] = None
    __logger__: Optional[Logger] = None

    @property
    def uuid(self):
        if not self.__uuid__:
            self.__uuid__ = str(uuid4())
        return self.__uuid__

    @property
    def logger(self):
        if not self.__logger__:
            self.__logger__ = get_logger(f'{type(self).__name__}/{self.uuid}')
        return self.__logger__

    def load(self) -> List[T]:
        """ Load the next batch of items """
        raise NotImplementedError()

    def has_more(self) -> bool:
        raise NotImplementedError()


class ResultIterator(Generic[T]):
    """ Iterate through the items provided by a loader, one batch at a time

        A batch is only loaded when the previous one is exhausted. If the loader raises an error,
        the error is propagated to the caller of ``next()`` and the iterator is depleted.
    """

    def __init__(self, loader: ResultLoader[T]):
        self.__read_lock = Lock()
        self.__loader = loader
        self.__buffer: List[T] = []
        self.__depleted = False

    def __iter__(self):
        return self

    def __next__(self) -> T:
        with self.__read_lock:
            while not self.__buffer:
                if self.__depleted or not self.__loader.has_more():
                    self.__depleted = True
                    raise StopIteration('No more result to iterate')

                try:
                    self.__buffer.extend(self.__loader.load())
                except Exception:
                    self.__depleted = True
                    raise

            return self.__buffer.pop(0)
