from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional, Set
import os
import posixpath
import logging

from cgroupmon.internal.errors import CounterFileMissingError

logger = logging.getLogger(__name__)


class AbstractFileSystem(ABC):
    """
    Read-only view over the accounting pseudo-filesystem. Every
    lookup done by the resolver and the extractors goes through it.
    """

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        pass

    @abstractmethod
    def is_file(self, path: str) -> bool:
        pass

    @abstractmethod
    def read_text(self, path: str) -> str:
        """
        Returns the whole content of the file, raising
        CounterFileMissingError when it cannot be read.
        """
        pass


class LocalFileSystem(AbstractFileSystem):
    """
    Reads the files from the host, usually under /sys/fs/cgroup.
    """

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_text(self, path: str) -> str:
        try:
            with open(path, "r") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"error reading {path}: {e}")
            raise CounterFileMissingError(path) from e


class MemoryFileSystem(AbstractFileSystem):
    """
    In-memory tree of files, mostly for building synthetic
    accounting hierarchies. Directories are implied by the files
    they contain or can be added empty.
    """

    def __init__(
        self,
        files: Optional[Dict[str, str]] = None,
        dirs: Optional[Iterable[str]] = None,
    ):
        self.files: Dict[str, str] = {}
        self.dirs: Set[str] = set()
        for path, content in (files or {}).items():
            self.add_file(path, content)
        for path in dirs or []:
            self.add_dir(path)

    @staticmethod
    def __normalize(path: str) -> str:
        return posixpath.normpath(path)

    def add_dir(self, path: str) -> None:
        path = self.__normalize(path)
        while path not in ("/", ".", ""):
            self.dirs.add(path)
            path = posixpath.dirname(path)

    def add_file(self, path: str, content: str) -> None:
        path = self.__normalize(path)
        self.files[path] = content
        self.add_dir(posixpath.dirname(path))

    def is_dir(self, path: str) -> bool:
        return self.__normalize(path) in self.dirs

    def is_file(self, path: str) -> bool:
        return self.__normalize(path) in self.files

    def read_text(self, path: str) -> str:
        content = self.files.get(self.__normalize(path))
        if content is None:
            raise CounterFileMissingError(path)
        return content
