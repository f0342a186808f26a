from ._errors import handle_errors
from ._logs import setup_logging
from ._request_spec import RequestSpec
from ._roles import extract_roles, record_type
from ._ssl_context import create_ssl_context, get_httpx_client_kwargs
from ._synthesize import build_request_spec, is_empty_value, stringify

__all__ = [
    "handle_errors",
    "setup_logging",
    "RequestSpec",
    "extract_roles",
    "record_type",
    "create_ssl_context",
    "get_httpx_client_kwargs",
    "build_request_spec",
    "is_empty_value",
    "stringify",
]
