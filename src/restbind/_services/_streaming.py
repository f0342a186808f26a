from logging import getLogger
from typing import Any, Optional, Sequence

import httpx
from websockets.datastructures import Headers
from websockets.exceptions import WebSocketException
from websockets.sync.client import ClientConnection, connect
from websockets.typing import Origin

from .._config import ClientConfig
from .._utils import build_request_spec, create_ssl_context
from .._utils.constants import LOGGER_NAME
from ..models.descriptors import CallResult, MethodDescriptor
from ..models.errors import RequestBuildFailure, RestBindError, TransportFailure
from ._dispatcher import merge_query

StreamingConnection = ClientConnection


class StreamingDispatcher:
    """Opens persistent socket connections for streaming stubs.

    A single connection attempt is made per call. The retry handler is never
    consulted and request transformers do not apply.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._config = config

    def location(self, path: str, params: Sequence[tuple[str, str]]) -> str:
        try:
            url = merge_query(httpx.URL(self._config.base_url + path), params)
        except httpx.InvalidURL as e:
            raise RequestBuildFailure(str(e)) from e
        return str(url)

    def open(
        self,
        location: str,
        origin: Optional[str],
        headers: Sequence[tuple[str, str]],
    ) -> StreamingConnection:
        kwargs: dict[str, Any] = {
            "origin": Origin(origin) if origin else None,
            "additional_headers": Headers(list(headers)),
            "open_timeout": self._config.timeout,
        }
        if location.startswith("wss://"):
            kwargs["ssl"] = create_ssl_context()

        try:
            return connect(location, **kwargs)
        except (OSError, TimeoutError, WebSocketException) as e:
            raise TransportFailure(str(e) or type(e).__name__) from e

    def dispatch(self, descriptor: MethodDescriptor, args: Sequence[Any]) -> CallResult:
        try:
            spec = build_request_spec(descriptor, args)
            location = self.location(spec.path, spec.params)
            self._logger.debug(f"Connect: {location}")
            connection = self.open(location, descriptor.origin, spec.headers)
        except RestBindError as e:
            return CallResult(None, e)

        return CallResult(connection, None)
