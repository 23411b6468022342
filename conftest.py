"""Shared fixtures: an in-memory FileSystem and ready-made apps"""

import os
import errno
from typing import Dict, Iterable, List

import pytest
from fastapi.testclient import TestClient

from filesystem import DirectoryEntry, EntryMetadata, LocalFileSystem
from main import create_app

FAKE_ROOT = "/srv/share"

class InMemoryFileSystem:
    """FileSystem fake keyed by absolute, normalised paths"""

    def __init__(self, root: str, files: Dict[str, bytes], dirs: Iterable[str] = (),
                 unreadable: Iterable[str] = ()):
        self.root = root
        self.files = {}
        self.dirs = {os.path.normpath(root)}
        self.unreadable = {self._abs(p) for p in unreadable}
        for rel, data in files.items():
            path = self._abs(rel)
            self.files[path] = data
            self._add_parents(path)
        for rel in dirs:
            path = self._abs(rel)
            self.dirs.add(path)
            self._add_parents(path)
        self.calls: List[str] = []

    def _abs(self, rel: str) -> str:
        return os.path.normpath(os.path.join(self.root, rel))

    def _add_parents(self, path: str):
        parent = os.path.dirname(path)
        while parent.startswith(self.root) and parent not in self.dirs:
            self.dirs.add(parent)
            parent = os.path.dirname(parent)

    def metadata(self, path: str) -> EntryMetadata:
        self.calls.append(f"metadata {path}")
        path = os.path.normpath(path)
        if path in self.dirs:
            return EntryMetadata(is_dir=True)
        if path in self.files:
            return EntryMetadata(is_dir=False)
        raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)

    def list_children(self, path: str) -> List[DirectoryEntry]:
        self.calls.append(f"list {path}")
        path = os.path.normpath(path)
        if path in self.unreadable:
            raise PermissionError(errno.EACCES, "Permission denied", path)
        if path not in self.dirs:
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
        entries = []
        for d in self.dirs:
            if d != path and os.path.dirname(d) == path:
                entries.append(DirectoryEntry(name=os.path.basename(d), is_dir=True))
        for f in self.files:
            if os.path.dirname(f) == path:
                entries.append(DirectoryEntry(name=os.path.basename(f), is_dir=False))
        return entries

    def read_bytes(self, path: str) -> bytes:
        self.calls.append(f"read {path}")
        path = os.path.normpath(path)
        if path in self.unreadable:
            raise PermissionError(errno.EACCES, "Permission denied", path)
        if path not in self.files:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        return self.files[path]

@pytest.fixture
def fake_fs():
    return InMemoryFileSystem(
        FAKE_ROOT,
        files={
            "a.txt": b"hi",
            "sub/b.txt": b"bee",
            "secret.bin": b"\x00\x01",
            "locked/inside.txt": b"x",
        },
        dirs=["empty"],
        unreadable=["secret.bin", "locked"],
    )

@pytest.fixture
def fake_client(fake_fs):
    return TestClient(create_app(FAKE_ROOT, fake_fs))

@pytest.fixture
def disk_root(tmp_path):
    """Real directory: a.txt ("hi") and sub/b.txt"""
    (tmp_path / "a.txt").write_bytes(b"hi")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_bytes(b"bee")
    return str(tmp_path.resolve())

@pytest.fixture
def client(disk_root):
    return TestClient(create_app(disk_root, LocalFileSystem()))
