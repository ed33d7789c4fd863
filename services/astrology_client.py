# astrology_client.py
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter

from services import config

logger = logging.getLogger(__name__)


class FetchError(str, Enum):
    STATUS = "status"
    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    DECODE = "decode"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one provider call: either `data` or an `error` kind."""

    path: str
    data: Optional[Any] = None
    error: Optional[FetchError] = None
    status_code: Optional[int] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_session(pool_size: int = config.MAX_CONCURRENCY) -> requests.Session:
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=1, pool_maxsize=pool_size)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class AstrologyClient:
    """POSTs the shared panchang payload to one provider endpoint at a time.

    `fetch` never raises; every failure comes back as a FetchResult. The
    client owns the worker pool its blocking calls run on, sized like the
    connection pool so a full fan-out never queues behind other work.
    """

    def __init__(
        self,
        base_url: str = config.ASTROLOGY_API_BASE_URL,
        api_key: str = config.ASTROLOGY_API_KEY,
        timeout: float = config.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
        max_workers: int = config.MAX_CONCURRENCY,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or build_session(max_workers)
        self.max_workers = max_workers
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="astrology-api")

    def fetch(self, path: str, payload: dict) -> FetchResult:
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json", "x-api-key": self.api_key}
        try:
            response = self.session.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.Timeout as e:
            return FetchResult(path, error=FetchError.TIMEOUT, detail=str(e))
        except requests.RequestException as e:
            return FetchResult(path, error=FetchError.TRANSPORT, detail=str(e))

        if not 200 <= response.status_code < 300:
            return FetchResult(
                path,
                error=FetchError.STATUS,
                status_code=response.status_code,
                detail=response.text[:200],
            )

        try:
            data = response.json()
        except ValueError as e:
            return FetchResult(path, error=FetchError.DECODE, status_code=response.status_code, detail=str(e))

        return FetchResult(path, data=data, status_code=response.status_code)

    def close(self):
        self.executor.shutdown(wait=False)
        self.session.close()
