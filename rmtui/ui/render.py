"""Pure layout: :class:`SessionState` in, a character grid out.

Every line of a frame spans exactly the requested number of terminal cells;
wide (East Asian) characters count as two.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from rich.cells import cell_len, chop_cells, get_character_cell_size, set_cell_size

from ..models import Entry
from .state import Mode, SessionState

MODAL_TITLES = {
    Mode.AWAITING_UPLOAD_PATH: " Upload File ",
    Mode.AWAITING_DOWNLOAD_PATH: " Download To ",
}


@dataclass
class Frame:
    lines: List[str]
    highlight_row: Optional[int] = None
    status_row: Optional[int] = None
    input_mode: bool = False
    # (top, left, height, width) of the input box, when shown
    modal: Optional[Tuple[int, int, int, int]] = None


def _split(text: str, cells: int) -> Tuple[str, str]:
    # A wide character cut in half becomes a space on each side.
    used = 0
    for index, ch in enumerate(text):
        w = get_character_cell_size(ch)
        if used + w > cells:
            if used < cells:
                return text[:index] + " ", " " + text[index + 1:]
            return text[:index], text[index:]
        used += w
    return text, ""


def _fit(text: str, width: int) -> str:
    return set_cell_size(text, width) if width > 0 else ""


def _put(grid: List[str], row: int, col: int, text: str) -> None:
    if not 0 <= row < len(grid):
        return
    line = grid[row]
    head, rest = _split(line, col)
    text = _split(text, cell_len(rest))[0]
    tail = _split(rest, cell_len(text))[1]
    grid[row] = head + text + tail


def _wrap(text: str, width: int) -> List[str]:
    return chop_cells(text, width) if text else [""]


def title_for(state: SessionState) -> str:
    if state.current_folder is None:
        return " Documents / (Root) "
    return f" Documents / {state.current_folder} "


def entry_label(entry: Entry) -> str:
    if entry.is_folder:
        return f"▸ {entry.name}/"
    return f"  {entry.name}"


def scroll_offset(selection: Optional[int], visible: int) -> int:
    if selection is None or visible <= 0 or selection < visible:
        return 0
    return selection - visible + 1


def _title_bar(title: str, inner: int) -> str:
    head = _split(title, inner)[0]
    return head + "─" * (inner - cell_len(head))


def render(state: SessionState, height: int, width: int) -> Frame:
    grid = [" " * max(width, 0) for _ in range(max(height, 0))]
    frame = Frame(lines=grid, input_mode=state.mode is not Mode.NORMAL)
    if height <= 0 or width <= 0:
        return frame

    list_height = height - 1
    if list_height >= 2 and width >= 2:
        inner = width - 2
        _put(grid, 0, 0, "┌" + _title_bar(title_for(state), inner) + "┐")
        visible = list_height - 2
        offset = scroll_offset(state.selection, visible)
        for row in range(visible):
            index = offset + row
            text = ""
            if index < len(state.entries):
                marker = "> " if index == state.selection else "  "
                text = marker + entry_label(state.entries[index])
                if index == state.selection:
                    frame.highlight_row = row + 1
            _put(grid, row + 1, 0, "│" + _fit(text, inner) + "│")
        _put(grid, list_height - 1, 0, "└" + "─" * inner + "┘")

    frame.status_row = height - 1
    grid[height - 1] = _fit(state.status_message, width)

    title = MODAL_TITLES.get(state.mode)
    box_width = max(width * 60 // 100, 3)
    box_height = max(height * 20 // 100, 3)
    if title is not None and box_width <= width and box_height <= height:
        top = (height - box_height) // 2
        left = (width - box_width) // 2
        inner = box_width - 2
        _put(grid, top, left, "┌" + _title_bar(title, inner) + "┐")
        rows = box_height - 2
        text = state.input_buffer
        chunks = _wrap(text, inner) if inner > 0 else [""]
        chunks = chunks[-rows:]
        for row in range(rows):
            chunk = chunks[row] if row < len(chunks) else ""
            _put(grid, top + 1 + row, left, "│" + _fit(chunk, inner) + "│")
        _put(grid, top + box_height - 1, left, "└" + "─" * inner + "┘")
        frame.modal = (top, left, box_height, box_width)
    return frame
