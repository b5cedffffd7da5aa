from typing import Any, Callable, Optional, Protocol

from ..api import list_documents, upload_document, validate_upload_source
from ..client import DeviceClient
from ..errors import InvalidInput, TransportError
from ..tree import download_selection
from ..utils import expand_user_path, get_logger
from .messages import DownloadDone, ListingFailed, ListingReady, Message, OperationFailed, UploadDone
from .state import Mode, SessionState


class Runner(Protocol):
    def run(
        self,
        fn: Callable[[], Any],
        on_result: Callable[[Any], Message],
        on_error: Callable[[Exception], Message],
    ) -> Any: ...


def _failed(prefix: str) -> Callable[[Exception], Message]:
    return lambda exc: OperationFailed(f"{prefix}: {exc}")


class Navigator:
    """Key-driven transitions over :class:`SessionState`.

    Anything that touches the network is handed to the runner together with
    copies of the values it needs; results come back as messages for the
    event loop to apply.
    """

    def __init__(self, client: DeviceClient, runner: Runner, state: Optional[SessionState] = None) -> None:
        self.client = client
        self.runner = runner
        self.state = state or SessionState()
        self.logger = get_logger("rmtui.ui")

    # -- browsing --

    def move_selection(self, delta: int) -> None:
        self.state.move_selection(delta)

    def open_selected(self) -> None:
        entry = self.state.selected_entry
        if entry is None or not entry.is_folder:
            return
        self.state.enter_folder(entry.id)
        self.refresh()

    def go_back(self) -> None:
        if not self.state.leave_folder():
            self.state.status_message = "Already at root."
            return
        self.refresh()

    def refresh(self) -> None:
        self.state.status_message = "Loading..."
        client = self.client
        folder = self.state.current_folder
        self.logger.debug("Listing folder=%s", folder)

        def work():
            return list_documents(client, folder)

        self.runner.run(
            work,
            on_result=lambda entries: ListingReady(folder=folder, entries=entries),
            on_error=lambda exc: ListingFailed(folder=folder, text=f"Listing failed: {exc}"),
        )

    # -- path prompts --

    def begin_download(self) -> None:
        if self.state.selected_entry is None:
            self.state.status_message = "Nothing selected."
            return
        self.state.start_input(Mode.AWAITING_DOWNLOAD_PATH)
        self.state.status_message = "Enter destination path:"

    def begin_upload(self) -> None:
        self.state.start_input(Mode.AWAITING_UPLOAD_PATH)
        self.state.status_message = "Enter file path to upload:"

    def type_char(self, char: str) -> None:
        self.state.input_buffer += char

    def erase_char(self) -> None:
        self.state.input_buffer = self.state.input_buffer[:-1]

    def cancel_input(self) -> None:
        if self.state.mode is Mode.AWAITING_DOWNLOAD_PATH:
            self.state.status_message = "Download cancelled."
        else:
            self.state.status_message = "Upload cancelled."
        self.state.finish_input()

    def confirm_input(self) -> None:
        if self.state.mode is Mode.AWAITING_DOWNLOAD_PATH:
            self.confirm_download()
        elif self.state.mode is Mode.AWAITING_UPLOAD_PATH:
            self.confirm_upload()

    def confirm_download(self) -> None:
        dest = expand_user_path(self.state.input_buffer)
        if not dest:
            self.state.status_message = "Path cannot be empty."
            return
        entry = self.state.selected_entry
        if entry is None:
            self.state.finish_input()
            self.state.status_message = "Nothing selected."
            return
        client = self.client

        def work():
            return download_selection(client, entry, dest)

        self.state.finish_input()
        self.state.status_message = f"Downloading {entry.name}..."
        self.logger.info("Download id=%s -> %s", entry.id, dest)
        self.runner.run(work, on_result=DownloadDone, on_error=_failed("Download failed"))

    def confirm_upload(self) -> None:
        try:
            path = validate_upload_source(expand_user_path(self.state.input_buffer))
        except InvalidInput as exc:
            self.state.status_message = str(exc)
            return
        client = self.client
        folder = self.state.current_folder

        def work():
            # Readiness check; only its failure matters.
            try:
                list_documents(client, folder)
            except TransportError as exc:
                raise TransportError(f"pre-check failed: {exc}") from exc
            upload_document(client, path)
            return path

        self.state.finish_input()
        self.state.status_message = f"Uploading {path}..."
        self.logger.info("Upload %s", path)
        self.runner.run(work, on_result=UploadDone, on_error=_failed("Upload failed"))
