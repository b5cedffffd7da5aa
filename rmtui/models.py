from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    FOLDER = "folder"
    DOCUMENT = "document"


@dataclass(frozen=True)
class Entry:
    id: str
    name: str
    kind: EntryKind

    @property
    def is_folder(self) -> bool:
        return self.kind is EntryKind.FOLDER
