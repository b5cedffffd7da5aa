"""Recursive download of a listed entry to the local filesystem.

Destination handling:

* a destination ending in the path separator, or naming an existing
  directory, receives the entry under its safe name; the directory must
  already exist.
* any other destination is used verbatim as the final path (so a folder can
  be saved under a new name); its parent must already exist.

Folders are walked depth-first, one listing call per folder and one download
per document, children in listing order. The first failure aborts the walk
and files written before it are kept.
"""
import os
from pathlib import Path
from typing import Union

from .api import download_document, list_documents
from .client import DeviceClient
from .errors import DestinationNotFound, LocalIOError
from .models import Entry
from .utils import get_logger

PDF_SUFFIX = ".pdf"


def _sanitize(name: str) -> str:
    cleaned = "".join(c if c.isalnum() or c in ".-_" else "_" for c in name)
    if cleaned.strip("."):
        return cleaned
    # "", "." and ".." would address the destination itself or its parent.
    return "_" * max(len(cleaned), 1)


def safe_name(entry: Entry) -> str:
    cleaned = _sanitize(entry.name)
    if not entry.is_folder and not cleaned.endswith(PDF_SUFFIX):
        cleaned = f"{cleaned}{PDF_SUFFIX}"
    return cleaned


def is_directory_target(dest: str) -> bool:
    return dest.endswith(os.sep) or os.path.isdir(dest)


def resolve_destination(entry: Entry, dest: Union[str, Path]) -> Path:
    dest = str(dest)
    if is_directory_target(dest):
        if not os.path.isdir(dest):
            raise DestinationNotFound(dest)
        return Path(dest) / safe_name(entry)
    target = Path(dest)
    if not target.parent.is_dir():
        raise DestinationNotFound(str(target.parent))
    return target


def _make_dirs(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LocalIOError(f"Cannot create directory {path}: {exc}") from exc


def _fetch_document(client: DeviceClient, entry: Entry, target: Path) -> None:
    _make_dirs(target.parent)
    try:
        handle = open(target, "wb")
    except OSError as exc:
        raise LocalIOError(f"Cannot open {target} for writing: {exc}") from exc
    with handle:
        try:
            download_document(client, entry.id, handle)
        except OSError as exc:
            raise LocalIOError(f"Cannot write {target}: {exc}") from exc


def materialize(client: DeviceClient, entry: Entry, target: Path) -> None:
    logger = get_logger("rmtui.tree")
    if not entry.is_folder:
        logger.debug("Fetching document id=%s -> %s", entry.id, target)
        _fetch_document(client, entry, target)
        return
    _make_dirs(target)
    children = list_documents(client, entry.id)
    logger.debug("Folder id=%s has %d children -> %s", entry.id, len(children), target)
    for child in children:
        materialize(client, child, target / safe_name(child))


def download_selection(client: DeviceClient, entry: Entry, dest: Union[str, Path]) -> Path:
    target = resolve_destination(entry, dest)
    materialize(client, entry, target)
    get_logger("rmtui.tree").info("Downloaded %s -> %s", entry.name, target)
    return target
