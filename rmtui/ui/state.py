from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..models import Entry


class Mode(Enum):
    NORMAL = "normal"
    AWAITING_UPLOAD_PATH = "awaiting_upload_path"
    AWAITING_DOWNLOAD_PATH = "awaiting_download_path"


@dataclass
class SessionState:
    """Everything the screen shows. Only the event loop thread touches it."""

    current_folder: Optional[str] = None
    history: List[Optional[str]] = field(default_factory=list)
    entries: List[Entry] = field(default_factory=list)
    selection: Optional[int] = None
    mode: Mode = Mode.NORMAL
    input_buffer: str = ""
    status_message: str = "Ready."

    @property
    def selected_entry(self) -> Optional[Entry]:
        if self.selection is None or self.selection >= len(self.entries):
            return None
        return self.entries[self.selection]

    def move_selection(self, delta: int) -> None:
        count = len(self.entries)
        if count == 0:
            return
        if self.selection is None:
            self.selection = 0
        else:
            self.selection = (self.selection + delta) % count

    def enter_folder(self, folder_id: str) -> None:
        self.history.append(self.current_folder)
        self.current_folder = folder_id
        self.selection = None

    def leave_folder(self) -> bool:
        if not self.history:
            return False
        self.current_folder = self.history.pop()
        self.selection = None
        return True

    def replace_entries(self, entries: List[Entry]) -> None:
        self.entries = list(entries)
        if not self.entries:
            self.selection = None
        elif self.selection is not None and self.selection >= len(self.entries):
            self.selection = len(self.entries) - 1

    def start_input(self, mode: Mode) -> None:
        self.mode = mode
        self.input_buffer = ""

    def finish_input(self) -> None:
        self.mode = Mode.NORMAL
        self.input_buffer = ""
