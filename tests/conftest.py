import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import httpx
import pytest

# Ensure root is importable as package base (so `import rmtui...` and `import endpoints` work)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep log files out of the working tree during tests
os.environ.setdefault("RMTUI_LOG", os.path.join(tempfile.gettempdir(), "rmtui-tests.log"))

from rmtui.client import DeviceClient  # noqa: E402


def folder_row(entry_id: str, name: str) -> Dict[str, str]:
    return {"ID": entry_id, "VissibleName": name, "Type": "CollectionType"}


def document_row(entry_id: str, name: str) -> Dict[str, str]:
    return {"ID": entry_id, "VissibleName": name, "Type": "DocumentType"}


class FakeDevice:
    """In-memory stand-in for the tablet's web interface."""

    def __init__(self) -> None:
        self.folders: Dict[Optional[str], List[Dict[str, Any]]] = {None: []}
        self.documents: Dict[str, bytes] = {}
        self.broken_downloads: Set[str] = set()
        self.upload_status = 201
        self.uploads: List[bytes] = []
        self.requests: List[Tuple[str, str]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append((request.method, path))
        if request.method == "GET" and path.startswith("/documents/"):
            folder = path[len("/documents/"):] or None
            if folder not in self.folders:
                return httpx.Response(404, text="no such folder")
            return httpx.Response(200, json=self.folders[folder])
        if request.method == "GET" and path.startswith("/download/") and path.endswith("/pdf"):
            doc_id = path[len("/download/"):-len("/pdf")]
            if doc_id in self.broken_downloads:
                raise httpx.ReadError("connection reset", request=request)
            if doc_id not in self.documents:
                return httpx.Response(404)
            return httpx.Response(200, content=self.documents[doc_id])
        if request.method == "POST" and path == "/upload":
            self.uploads.append(request.read())
            return httpx.Response(self.upload_status)
        return httpx.Response(405)


@pytest.fixture
def device() -> FakeDevice:
    return FakeDevice()


@pytest.fixture
def client(device: FakeDevice):
    c = DeviceClient(base_url="http://device.test", transport=httpx.MockTransport(device.handler))
    yield c
    c.close()
