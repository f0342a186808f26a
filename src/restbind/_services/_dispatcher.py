from logging import getLogger
from typing import Any, Callable, Optional, Sequence

import httpx
from tenacity import Retrying, retry_if_exception, stop_never, wait_none

from .._config import ClientConfig
from .._utils import RequestSpec, build_request_spec, handle_errors
from .._utils.constants import FORM_URLENCODED, HEADER_CONTENT_TYPE, LOGGER_NAME
from ..models.descriptors import CallResult, MethodDescriptor
from ..models.errors import (
    DecodeFailure,
    RequestBuildFailure,
    RestBindError,
    TransportFailure,
)
from ..retry import RetryHandler
from ..unmarshal import Unmarshaler

RequestTransformer = Callable[[httpx.Request], httpx.Request]


def merge_query(url: httpx.URL, params: Sequence[tuple[str, str]]) -> httpx.URL:
    """Append query pairs to a URL, keeping the ones it already carries."""
    if not params:
        return url
    merged = httpx.QueryParams(url.params.multi_items() + list(params))
    return url.copy_with(params=merged)


class Dispatcher:
    """Sends synthesized requests and decodes their responses."""

    def __init__(
        self,
        config: ClientConfig,
        http_client: httpx.Client,
        *,
        unmarshaler: Optional[Unmarshaler] = None,
        retry_handler: Optional[RetryHandler] = None,
        transformers: Sequence[RequestTransformer] = (),
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._config = config
        self._client = http_client
        self._unmarshaler = unmarshaler
        self._retry_handler = retry_handler
        self._transformers = tuple(transformers)

    def build_request(self, spec: RequestSpec) -> httpx.Request:
        try:
            url = merge_query(httpx.URL(self._config.base_url + spec.path), spec.params)
        except httpx.InvalidURL as e:
            raise RequestBuildFailure(str(e)) from e

        try:
            headers = httpx.Headers(spec.headers)
        except UnicodeEncodeError as e:
            raise RequestBuildFailure(f"Header values must be ASCII: {e}") from e
        if spec.form_encoded and HEADER_CONTENT_TYPE not in headers:
            headers[HEADER_CONTENT_TYPE] = FORM_URLENCODED

        return httpx.Request(spec.method, url, headers=headers, content=spec.content)

    def apply_request_transformers(self, request: httpx.Request) -> httpx.Request:
        """Run the configured transformers in registration order.

        Raises:
            RequestBuildFailure: A transformer raised. The original exception
                is chained as its cause.
        """
        for transformer in self._transformers:
            try:
                request = transformer(request)
            except RestBindError:
                raise
            except Exception as e:
                name = getattr(transformer, "__name__", repr(transformer))
                raise RequestBuildFailure(
                    f"Request transformer {name} failed: {e}"
                ) from e
        return request

    def _send_once(self, request: httpx.Request) -> httpx.Response:
        with handle_errors():
            response = self._client.send(request)
            if self._config.raise_for_status:
                response.raise_for_status()
        return response

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send a request, resending it while the retry handler allows.

        Raises:
            TransportFailure: The failure the retry handler chose to surface,
                or the first failure when no handler is configured.
        """
        surfaced: dict[str, TransportFailure] = {}

        def should_retry(exception: BaseException) -> bool:
            if self._retry_handler is None or not isinstance(
                exception, TransportFailure
            ):
                return False
            failure = self._retry_handler.retry(exception)
            if failure is None:
                self._logger.debug(f"Resending: {request.method} {request.url}")
                return True
            surfaced["failure"] = failure
            return False

        try:
            for attempt in Retrying(
                retry=retry_if_exception(should_retry),
                stop=stop_never,
                wait=wait_none(),
                reraise=True,
            ):
                with attempt:
                    return self._send_once(request)
        except TransportFailure as e:
            failure = surfaced.get("failure", e)
            if failure is e:
                raise
            raise failure from e

    def decode(self, payload_type: Any, response: httpx.Response) -> Any:
        body = response.read()

        if self._unmarshaler is None:
            if payload_type is bytes:
                return body
            raise DecodeFailure(f"No unmarshaler configured to decode {payload_type!r}")

        try:
            return self._unmarshaler.unmarshal(body, payload_type)
        except DecodeFailure:
            raise
        except Exception as e:
            raise DecodeFailure(str(e)) from e

    def dispatch(self, descriptor: MethodDescriptor, args: Sequence[Any]) -> CallResult:
        try:
            spec = build_request_spec(descriptor, args)
            request = self.apply_request_transformers(self.build_request(spec))
            self._logger.debug(f"Request: {request.method} {request.url}")
            response = self.send(request)
            payload = self.decode(descriptor.payload_type, response)
        except RestBindError as e:
            return CallResult(None, e)

        return CallResult(payload, None)
