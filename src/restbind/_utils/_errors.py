from contextlib import contextmanager
from typing import Generator

import httpx

from ..models.errors import StatusFailure, TransportFailure


@contextmanager
def handle_errors() -> Generator[None, None, None]:
    """Context manager converting httpx errors raised while sending a request.

    Raises:
        StatusFailure: For ``httpx.HTTPStatusError``, keeping the status code
            and the response body.
        TransportFailure: For any other ``httpx.RequestError`` (connection,
            timeout, protocol and redirect errors).
    """
    try:
        yield
    except httpx.HTTPStatusError as e:
        response = e.response
        try:
            body = response.read()
        except httpx.StreamError:
            body = b""
        raise StatusFailure(response.status_code, body, str(e)) from e
    except httpx.RequestError as e:
        raise TransportFailure(str(e) or type(e).__name__) from e
