"""Segment request controller using the httpx async client.

Only one request is ever outstanding: issuing a new one cancels the previous
request, whose handle then resolves to ``Aborted``.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from scrollfeed.core.errors import ConfigurationError
from scrollfeed.core.outcomes import (
    Aborted,
    Empty,
    FetchOutcome,
    NotFound,
    Success,
    TransportError,
)

logger = logging.getLogger("ScrollFeed.FetchController")

_DEFAULT_TIMEOUT_SECONDS: float = 30.0
_PAYLOAD_SHAPES = frozenset({"json", "html"})
_NO_MORE_CONTENT_HEADERS = ("NoMoreContent", "No-Content")
_CONTENT_COUNTER_HEADER = "Content-Counter"
_FALSY_HEADER_VALUES = frozenset({"", "0", "false", "no", "off", "null", "undefined"})


def _header_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() not in _FALSY_HEADER_VALUES


def _header_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        logger.warning(f"Ignoring non-integer {_CONTENT_COUNTER_HEADER} header: {value!r}")
        return None


def _is_empty_payload(payload: Any) -> bool:
    if payload is None:
        return True
    if isinstance(payload, str):
        return not payload.strip()
    if isinstance(payload, (list, dict)):
        return len(payload) == 0
    return False


class FetchHandle:
    """Cancellation handle of one issued request."""

    def __init__(self, generation: int, task: "asyncio.Task[FetchOutcome]"):
        self.generation = generation
        self._task = task

    def cancel(self) -> None:
        self._task.cancel()

    def done(self) -> bool:
        return self._task.done()

    async def wait(self) -> FetchOutcome:
        # asyncio.wait leaves cancellation of the caller separate from
        # cancellation of the request task.
        await asyncio.wait({self._task})
        if self._task.cancelled():
            return Aborted(generation=self.generation)
        return self._task.result()


class FetchController:
    """Owns the single outstanding segment request.

    Status mapping:
        - 200 with a non-empty body: ``Success``
        - 200 with an empty body: ``Empty``
        - 404: ``NotFound``
        - anything else, undecodable bodies and transport failures: ``TransportError``
    """

    def __init__(
        self,
        route: str,
        payload_shape: str = "json",
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize FetchController.

        Args:
            route: URL the segments are requested from
            payload_shape: "json" or "html"
            timeout: Request timeout in seconds
            http_client: Optional pre-configured client. If None, one is
                created lazily and closed by ``aclose``.
        """
        if payload_shape not in _PAYLOAD_SHAPES:
            raise ConfigurationError(f"Unknown payload shape: {payload_shape!r}")
        if not route:
            raise ConfigurationError("A route is required to fetch segments")

        self.route = route
        self.payload_shape = payload_shape
        self.timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None
        self._generation = 0
        self._current: Optional[FetchHandle] = None
        self.last_raw_payload: Optional[str] = None

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    @property
    def in_flight(self) -> bool:
        return self._current is not None and not self._current.done()

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
        return self._http_client

    def issue(self, params: Dict[str, Any]) -> FetchHandle:
        """Cancel any outstanding request and start a new one.

        Must be called from a running event loop.
        """
        self._abort_current()
        self._generation += 1
        generation = self._generation
        task = asyncio.ensure_future(self._run(generation, dict(params)))
        self._current = FetchHandle(generation, task)
        logger.debug(f"Issued request #{generation} with params {params}")
        return self._current

    async def load(self, params: Dict[str, Any]) -> FetchOutcome:
        return await self.issue(params).wait()

    def cancel(self) -> None:
        """Abort the outstanding request and retire its generation.

        A handle issued before the call is no longer current, even when its
        response has already arrived and only its waiter is still pending.
        """
        self._abort_current()
        self._generation += 1

    def _abort_current(self) -> None:
        if self._current is not None and not self._current.done():
            logger.debug(f"Cancelling request #{self._current.generation}")
            self._current.cancel()
        self._current = None

    async def aclose(self) -> None:
        """Cancel the outstanding request and release the client."""
        self.cancel()
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def _run(self, generation: int, params: Dict[str, Any]) -> FetchOutcome:
        try:
            response = await self._get_http_client().get(self.route, params=params)
        except asyncio.CancelledError:
            return Aborted(generation=generation)
        except httpx.HTTPError as e:
            if not self.is_current(generation):
                return Aborted(generation=generation)
            logger.warning(f"Request #{generation} failed: {type(e).__name__}: {e}")
            return TransportError(detail=str(e) or type(e).__name__, generation=generation)

        # The response may land after a newer request was issued.
        if not self.is_current(generation):
            logger.debug(f"Request #{generation} superseded, discarding response")
            return Aborted(generation=generation)

        return self._to_outcome(response, generation)

    def _to_outcome(self, response: httpx.Response, generation: int) -> FetchOutcome:
        status = response.status_code
        if status == 404:
            logger.info(f"Request #{generation}: segment route returned 404")
            return NotFound(status=status, generation=generation)
        if status != 200:
            logger.warning(f"Request #{generation}: unexpected status {status}")
            return TransportError(
                detail=f"HTTP {status} {response.reason_phrase}".strip(),
                status=status,
                generation=generation,
            )

        raw = response.text
        try:
            payload = self._decode(raw)
        except ValueError as e:
            logger.warning(f"Request #{generation}: could not decode {self.payload_shape} body: {e}")
            return TransportError(
                detail=f"Invalid {self.payload_shape} payload: {e}",
                status=status,
                generation=generation,
            )

        self.last_raw_payload = raw
        more_available, item_count = self._read_headers(response.headers)

        if _is_empty_payload(payload):
            logger.info(f"Request #{generation}: empty segment")
            return Empty(payload=payload, item_count=item_count, generation=generation)

        return Success(
            payload=payload,
            more_available=more_available,
            item_count=item_count,
            generation=generation,
        )

    def _decode(self, raw: str) -> Any:
        if self.payload_shape == "html":
            return raw
        if not raw.strip():
            return None
        return json.loads(raw)

    @staticmethod
    def _read_headers(headers: httpx.Headers) -> Tuple[bool, Optional[int]]:
        no_more_content = any(_header_flag(headers.get(name)) for name in _NO_MORE_CONTENT_HEADERS)
        item_count = _header_int(headers.get(_CONTENT_COUNTER_HEADER))
        return not no_more_content, item_count
