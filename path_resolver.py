"""
Path resolution: turns a raw URL path segment into a classified target under
the server root.
"""

import os
import re
import enum
import logging
from dataclasses import dataclass
from typing import Union
from urllib.parse import unquote_to_bytes

from errors import BadRequest, NotFound
from filesystem import FileSystem

logger = logging.getLogger(__name__)

# A '%' that does not start a two-digit hex escape
_MALFORMED_ESCAPE = re.compile(rb"%(?![0-9A-Fa-f]{2})")

class TargetKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"

@dataclass(frozen=True)
class ResolvedTarget:
    path: str
    kind: TargetKind

def decode_path(raw: Union[str, bytes]) -> str:
    """Percent-decode a raw path segment, raising BadRequest on malformed input"""
    if isinstance(raw, str):
        raw = raw.encode("utf-8")

    if _MALFORMED_ESCAPE.search(raw):
        raise BadRequest()

    try:
        return unquote_to_bytes(raw).decode("utf-8")
    except UnicodeDecodeError:
        raise BadRequest() from None

def is_within_root(root: str, path: str) -> bool:
    """Lexical containment check; symlinks are not followed"""
    root = os.path.normpath(root)
    path = os.path.normpath(path)
    try:
        return os.path.commonpath([root, path]) == root
    except ValueError:
        return False

def is_root(root: str, path: str) -> bool:
    return os.path.normpath(root) == os.path.normpath(path)

def resolve(root: str, raw_path: Union[str, bytes], filesystem: FileSystem) -> ResolvedTarget:
    """Resolve ``raw_path`` against ``root`` and classify the result.

    ``raw_path`` is the still-encoded URL path with or without its leading
    slash; an empty value names the root itself. Raises BadRequest for bad
    percent-encoding and NotFound for anything that cannot be stat'ed or
    escapes the root.
    """
    decoded = decode_path(raw_path)

    # A leading slash would make the join discard the root. The normalised
    # path is both checked and served, so '..' never follows a symlink.
    candidate = os.path.normpath(os.path.join(root, decoded.lstrip("/")))

    if not is_within_root(root, candidate):
        logger.warning(f"Rejected path outside root: {decoded!r}")
        raise NotFound()

    try:
        meta = filesystem.metadata(candidate)
    except (OSError, ValueError) as e:
        # ValueError covers embedded NUL bytes
        logger.debug(f"No metadata for {candidate}: {e}")
        raise NotFound() from None

    # normpath drops the trailing slash; a file cannot be traversed as a directory
    if decoded.endswith("/") and not meta.is_dir:
        raise NotFound()

    kind = TargetKind.DIRECTORY if meta.is_dir else TargetKind.FILE
    return ResolvedTarget(path=candidate, kind=kind)
