import logging
import os
from datetime import datetime
from typing import Optional

DEFAULT_LOG_PATH = "rmtui.log"


def debug_enabled() -> bool:
    return os.getenv("RMTUI_DEBUG", "0") in ("1", "true", "TRUE")


def get_logger(name: str) -> logging.Logger:
    # The terminal UI owns the tty, so log records go to a file.
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.FileHandler(os.getenv("RMTUI_LOG") or DEFAULT_LOG_PATH, delay=True, encoding="utf-8")
        formatter = logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)
    return logger


def http_log_path() -> Optional[str]:
    return os.getenv("RMTUI_HTTP_LOG") or None


def append_log_line(path: str, line: str) -> None:
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    safe_line = line.rstrip("\n")
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(f"[{timestamp}] {safe_line}\n")


def truncate_text(text: str, limit: int = 2000) -> str:
    if text is None:
        return ""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}...[truncated {len(text) - limit} chars]"


def expand_user_path(raw: str) -> str:
    """Trim user-typed path text and expand a leading ``~``."""
    text = raw.strip()
    if not text:
        return ""
    return os.path.expanduser(text)
