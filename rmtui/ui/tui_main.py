import curses
import faulthandler
import os

from ..client import DeviceClient
from ..utils import append_log_line, get_logger
from .navigator import Navigator
from .router import EventLoop, make_channel
from .terminal import CursesScreen
from .threads import TaskRunner


def main() -> int:
    logger = get_logger("rmtui")
    fault_log = os.path.join(os.getcwd(), "rmtui_fault.log")
    if os.getenv("RMTUI_FAULTHANDLER", "1") not in ("0", "false", "FALSE"):
        try:
            fh = open(fault_log, "a", buffering=1, encoding="utf-8")
            faulthandler.enable(file=fh, all_threads=True)
            append_log_line(fault_log, "faulthandler enabled")
            logger.info("Faulthandler enabled -> %s", fault_log)
        except OSError as exc:
            logger.info("Faulthandler enable failed: %s", exc)
    # Esc cancels a prompt; do not wait a full second to tell it from a sequence.
    os.environ.setdefault("ESCDELAY", "25")

    client = DeviceClient()
    channel = make_channel()
    runner = TaskRunner(channel)
    loop = EventLoop(Navigator(client, runner), channel)
    logger.info("Starting against %s", client.base_url)
    try:
        curses.wrapper(lambda stdscr: loop.run(CursesScreen(stdscr)))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except curses.error as exc:
        print(f"Curses error. Your terminal might not be fully compatible.\nError: {exc}")
        return 1
    finally:
        runner.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
