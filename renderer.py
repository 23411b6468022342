"""Response rendering for resolved targets: raw file bytes or an HTML index"""

import os
import html
import logging
import mimetypes
from typing import Iterable, List
from urllib.parse import quote

from fastapi.responses import HTMLResponse, Response

from errors import Forbidden
from filesystem import DirectoryEntry, FileSystem
from path_resolver import ResolvedTarget, TargetKind, is_root

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"

PAGE_HEAD = (
    "<!doctype html><html><head><meta charset='utf-8'>"
    "<title>Index</title>"
    "<style>body{font-family:system-ui,Arial,sans-serif} a{text-decoration:none}</style>"
    "</head><body>"
    "<h1>Index</h1><ul>"
)
PAGE_TAIL = "</ul></body></html>"
UP_LINK = '<li><a href="../">../</a></li>'

def guess_media_type(path: str) -> str:
    media_type, _ = mimetypes.guess_type(os.path.basename(path))
    return media_type or DEFAULT_MEDIA_TYPE

def entry_href(entry: DirectoryEntry) -> str:
    """Percent-encoded link target, built from the exact on-disk bytes"""
    href = quote(os.fsencode(entry.name), safe="")
    return href + "/" if entry.is_dir else href

def entry_label(entry: DirectoryEntry) -> str:
    """HTML-escaped display text; undecodable bytes are shown as U+FFFD"""
    name = os.fsencode(entry.name).decode("utf-8", "replace")
    if entry.is_dir:
        name += "/"
    return html.escape(name, quote=True)

def sort_entries(entries: Iterable[DirectoryEntry]) -> List[DirectoryEntry]:
    return sorted(entries, key=lambda e: e.sort_key)

def build_listing_html(entries: Iterable[DirectoryEntry], include_up_link: bool) -> str:
    parts = [PAGE_HEAD]
    if include_up_link:
        parts.append(UP_LINK)
    for entry in sort_entries(entries):
        parts.append(f'<li><a href="{entry_href(entry)}">{entry_label(entry)}</a></li>')
    parts.append(PAGE_TAIL)
    return "".join(parts)

def render_file(target: ResolvedTarget, filesystem: FileSystem) -> Response:
    try:
        body = filesystem.read_bytes(target.path)
    except (OSError, ValueError) as e:
        logger.warning(f"Cannot read file {target.path}: {e}")
        raise Forbidden("Cannot read file") from None

    return Response(content=body, status_code=200, media_type=guess_media_type(target.path))

def render_directory(root: str, target: ResolvedTarget, filesystem: FileSystem) -> HTMLResponse:
    try:
        entries = filesystem.list_children(target.path)
    except (OSError, ValueError) as e:
        logger.warning(f"Cannot list directory {target.path}: {e}")
        raise Forbidden("Cannot read directory") from None

    document = build_listing_html(entries, include_up_link=not is_root(root, target.path))
    return HTMLResponse(content=document, status_code=200)

def render(root: str, target: ResolvedTarget, filesystem: FileSystem) -> Response:
    if target.kind is TargetKind.DIRECTORY:
        return render_directory(root, target, filesystem)
    return render_file(target, filesystem)
