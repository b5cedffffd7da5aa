from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..models import Entry


@dataclass(frozen=True)
class ListingReady:
    folder: Optional[str]
    entries: List[Entry]


@dataclass(frozen=True)
class DownloadDone:
    path: Path


@dataclass(frozen=True)
class UploadDone:
    path: str


@dataclass(frozen=True)
class OperationFailed:
    text: str


@dataclass(frozen=True)
class ListingFailed:
    folder: Optional[str]
    text: str


Message = Union[ListingReady, ListingFailed, DownloadDone, UploadDone, OperationFailed]
