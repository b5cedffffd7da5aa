"""The single coordination point of the terminal UI.

Each iteration draws the current state, waits up to one tick for a key and
then applies every completion message queued by background workers. Only
this loop mutates :class:`SessionState` once the UI is running; workers talk
to it exclusively through the bounded channel.
"""
import queue
from typing import Callable, Dict, Optional, Protocol, Tuple

from ..utils import get_logger
from . import keys
from .messages import DownloadDone, ListingFailed, ListingReady, Message, OperationFailed, UploadDone
from .navigator import Navigator
from .render import Frame, render
from .state import Mode, SessionState

TICK_RATE = 0.1
CHANNEL_CAPACITY = 10


def make_channel() -> "queue.Queue[Message]":
    return queue.Queue(maxsize=CHANNEL_CAPACITY)


class Screen(Protocol):
    def size(self) -> Tuple[int, int]: ...
    def draw(self, frame: Frame) -> None: ...
    def poll_key(self, timeout: float) -> Optional[str]: ...


class EventLoop:
    def __init__(
        self,
        navigator: Navigator,
        channel: "queue.Queue[Message]",
        tick_rate: float = TICK_RATE,
    ) -> None:
        self.navigator = navigator
        self.channel = channel
        self.tick_rate = tick_rate
        self.logger = get_logger("rmtui.ui")
        self._normal_keys: Dict[str, Callable[[], None]] = {
            "j": lambda: navigator.move_selection(1),
            keys.DOWN: lambda: navigator.move_selection(1),
            "k": lambda: navigator.move_selection(-1),
            keys.UP: lambda: navigator.move_selection(-1),
            "l": navigator.open_selected,
            keys.ENTER: navigator.open_selected,
            keys.RIGHT: navigator.open_selected,
            "h": navigator.go_back,
            keys.LEFT: navigator.go_back,
            keys.BACKSPACE: navigator.go_back,
            "d": navigator.begin_download,
            "u": navigator.begin_upload,
            "r": navigator.refresh,
        }

    @property
    def state(self) -> SessionState:
        return self.navigator.state

    def handle_key(self, key: str) -> bool:
        """Route one key press. Returns False when the user asked to quit."""
        if self.state.mode is Mode.NORMAL:
            if key == "q":
                return False
            action = self._normal_keys.get(key)
            if action is not None:
                action()
            return True

        if key == keys.ENTER:
            self.navigator.confirm_input()
        elif key == keys.ESCAPE:
            self.navigator.cancel_input()
        elif key == keys.BACKSPACE:
            self.navigator.erase_char()
        elif keys.is_printable(key):
            self.navigator.type_char(key)
        return True

    def apply(self, message: Message) -> None:
        state = self.state
        if isinstance(message, ListingReady):
            if message.folder != state.current_folder:
                self.logger.debug(
                    "Discarding stale listing folder=%s current=%s", message.folder, state.current_folder
                )
                return
            state.replace_entries(message.entries)
            state.status_message = f"Loaded {len(state.entries)} items."
        elif isinstance(message, ListingFailed):
            if message.folder != state.current_folder:
                self.logger.debug(
                    "Discarding stale listing failure folder=%s current=%s", message.folder, state.current_folder
                )
                return
            self.logger.warning("%s", message.text)
            state.status_message = f"Error: {message.text}"
        elif isinstance(message, DownloadDone):
            state.status_message = f"Downloaded to {message.path}."
        elif isinstance(message, UploadDone):
            self.navigator.refresh()
            state.status_message = f"Uploaded {message.path}. Refreshing..."
        elif isinstance(message, OperationFailed):
            self.logger.warning("%s", message.text)
            state.status_message = f"Error: {message.text}"
        else:
            raise TypeError(f"Unknown message: {message!r}")

    def drain_messages(self) -> int:
        handled = 0
        while True:
            try:
                message = self.channel.get_nowait()
            except queue.Empty:
                return handled
            self.apply(message)
            handled += 1

    def run(self, screen: Screen) -> None:
        self.navigator.refresh()
        while True:
            height, width = screen.size()
            screen.draw(render(self.state, height, width))
            key = screen.poll_key(self.tick_rate)
            if key is not None and not self.handle_key(key):
                self.logger.info("Quit requested")
                return
            self.drain_messages()
