"""Filesystem access used by the path resolver and response renderer"""

import os
import stat
import logging
from dataclasses import dataclass
from typing import List, Protocol

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class EntryMetadata:
    is_dir: bool

@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    is_dir: bool

    @property
    def sort_key(self) -> bytes:
        """Byte-wise ordering key, matching the on-disk name bytes"""
        return os.fsencode(self.name)

class FileSystem(Protocol):
    """Capability interface; every method raises OSError on failure"""

    def metadata(self, path: str) -> EntryMetadata: ...

    def list_children(self, path: str) -> List[DirectoryEntry]: ...

    def read_bytes(self, path: str) -> bytes: ...

class LocalFileSystem:
    """FileSystem backed by the real disk"""

    def metadata(self, path: str) -> EntryMetadata:
        st = os.stat(path)
        return EntryMetadata(is_dir=stat.S_ISDIR(st.st_mode))

    def list_children(self, path: str) -> List[DirectoryEntry]:
        entries = []
        with os.scandir(path) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir()
                except OSError as e:
                    # Unknown type is listed as a plain file
                    logger.debug(f"Cannot determine type of {entry.path}: {e}")
                    is_dir = False
                entries.append(DirectoryEntry(name=entry.name, is_dir=is_dir))
        return entries

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()
