import os
from typing import Any, BinaryIO, List, Optional

from endpoints import DOCUMENTS, DOWNLOAD, UPLOAD, FIELD_ID, FIELD_NAME, FIELD_TYPE, FOLDER_TYPE
from .client import DeviceClient
from .errors import InvalidInput, LocalIOError, TransportError
from .models import Entry, EntryKind


def _json_list_or_raise(resp) -> List[Any]:
    try:
        payload = resp.json()
    except ValueError as exc:
        raise TransportError(f"Non-JSON response: {resp.text[:200]}") from exc
    if not isinstance(payload, list):
        raise TransportError(f"Unexpected response: {payload!r:.200}")
    return payload


def _entry_from_row(row: Any) -> Entry:
    if not isinstance(row, dict):
        raise TransportError(f"Unexpected listing row: {row!r:.200}")
    values = [row.get(FIELD_ID), row.get(FIELD_NAME), row.get(FIELD_TYPE)]
    if not all(isinstance(v, str) for v in values):
        raise TransportError(f"Malformed listing row: {row!r:.200}")
    entry_id, name, entry_type = values
    kind = EntryKind.FOLDER if entry_type == FOLDER_TYPE else EntryKind.DOCUMENT
    return Entry(id=entry_id, name=name, kind=kind)


def list_documents(client: DeviceClient, folder: Optional[str] = None) -> List[Entry]:
    if folder is None:
        endpoint = DOCUMENTS["root"]
        path = endpoint["path"]
    else:
        endpoint = DOCUMENTS["folder"]
        path = endpoint["path"].format(id=folder)
    resp = client.request(endpoint["method"], path)
    return [_entry_from_row(row) for row in _json_list_or_raise(resp)]


def download_document(client: DeviceClient, document_id: str, sink: BinaryIO) -> int:
    """Stream a document's PDF rendition into ``sink``; returns bytes written."""
    endpoint = DOWNLOAD["pdf"]
    written = 0
    with client.stream(endpoint["method"], endpoint["path"].format(id=document_id)) as resp:
        for chunk in resp.iter_bytes():
            sink.write(chunk)
            written += len(chunk)
    return written


def validate_upload_source(path: str) -> str:
    if not path:
        raise InvalidInput("Path cannot be empty.")
    if not os.path.exists(path):
        raise InvalidInput("File does not exist.")
    if not os.path.isfile(path):
        raise InvalidInput(f"Not a file: {path}")
    return path


def upload_document(client: DeviceClient, local_path: str) -> None:
    filename = os.path.basename(local_path)
    try:
        with open(local_path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise LocalIOError(f"Cannot read {local_path}: {exc}") from exc
    endpoint = UPLOAD["file"]
    client.request(endpoint["method"], endpoint["path"], files={"file": (filename, data)})
