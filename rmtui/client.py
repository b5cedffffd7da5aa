from contextlib import contextmanager
from typing import Any, Iterator, Optional

try:
    import httpx
except ModuleNotFoundError as exc:  # pragma: no cover - user environment dependency
    raise ModuleNotFoundError(
        "Missing dependency 'httpx'. Install with: pip install httpx"
    ) from exc

from endpoints import BASE_URL
from .errors import TransportError
from .utils import append_log_line, get_logger, http_log_path, truncate_text


class DeviceClient:
    """Thin wrapper over a shared ``httpx.Client`` pointed at the tablet.

    The client is safe to share between worker threads. No timeout is set:
    a hung request only stalls the worker that issued it.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.logger = get_logger('rmtui.http')
        self._client = httpx.Client(base_url=self.base_url, timeout=None, transport=transport)
        self.http_log_path = http_log_path()

    def _url(self, path: str) -> str:
        return path if path.startswith('http') else f"{self.base_url}{path}"

    def _trace(self, line: str) -> None:
        if self.http_log_path:
            append_log_line(self.http_log_path, line)

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = self._url(path)
        self.logger.debug('HTTP %s %s', method, url)
        self._trace(f"{method} {url}")
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        self._trace(f"{method} {url} status={resp.status_code} response={truncate_text(resp.text or '')}")
        if not resp.is_success:
            raise TransportError(f"{method} {url} returned status {resp.status_code}")
        return resp

    @contextmanager
    def stream(self, method: str, path: str, **kwargs: Any) -> Iterator[httpx.Response]:
        url = self._url(path)
        self.logger.debug('HTTP stream %s %s', method, url)
        self._trace(f"{method} {url} (stream)")
        try:
            with self._client.stream(method, url, **kwargs) as resp:
                self._trace(f"{method} {url} status={resp.status_code}")
                if not resp.is_success:
                    raise TransportError(f"{method} {url} returned status {resp.status_code}")
                yield resp
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    def close(self) -> None:
        self._client.close()
