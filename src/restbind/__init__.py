"""Declarative HTTP and streaming-socket clients.

Describe a remote service as stubs on a ``Service`` subclass, compile it with
a ``Client`` and call the stubs like methods:

```python
from typing import Annotated

from pydantic import BaseModel
from restbind import ClientBuilder, JsonUnmarshaler, PathParam, RestBindError, Service, stub


class UserArgs(BaseModel):
    login: Annotated[str, PathParam("login")]


class Users(Service):
    get_user = stub("GET", "/users/{login}", params=[UserArgs], returns=(dict, RestBindError))


client = ClientBuilder().base_url("https://api.github.com").set_unmarshaler(JsonUnmarshaler()).build()
users = Users()
client.init(users)
user, failure = users.get_user(UserArgs(login="octocat"))
```
"""

from ._client import Client, ClientBuilder, Service
from ._config import ClientConfig
from ._services import RequestTransformer, StreamingConnection
from ._utils import RequestSpec, build_request_spec, extract_roles, setup_logging
from .models import (
    ArgumentDescriptor,
    Body,
    BodyFieldConflict,
    CallFailure,
    CallResult,
    CompileError,
    DecodeFailure,
    FieldArg,
    FieldRole,
    FieldRoleMap,
    FormField,
    HeaderParam,
    InvalidSignature,
    MethodDescriptor,
    MultipleBodyFields,
    PathParam,
    QueryParam,
    RequestBodyConflict,
    RequestBuildFailure,
    RestBindError,
    StatusFailure,
    StubDeclaration,
    TransportFailure,
    UnsupportedMethod,
    stub,
)
from .retry import BasicRetryHandler, RetryHandler
from .unmarshal import JsonUnmarshaler, Unmarshaler

__all__ = [
    "Client",
    "ClientBuilder",
    "ClientConfig",
    "Service",
    "RequestTransformer",
    "StreamingConnection",
    "RequestSpec",
    "build_request_spec",
    "extract_roles",
    "setup_logging",
    "ArgumentDescriptor",
    "Body",
    "BodyFieldConflict",
    "CallFailure",
    "CallResult",
    "CompileError",
    "DecodeFailure",
    "FieldArg",
    "FieldRole",
    "FieldRoleMap",
    "FormField",
    "HeaderParam",
    "InvalidSignature",
    "MethodDescriptor",
    "MultipleBodyFields",
    "PathParam",
    "QueryParam",
    "RequestBodyConflict",
    "RequestBuildFailure",
    "RestBindError",
    "StatusFailure",
    "StubDeclaration",
    "TransportFailure",
    "UnsupportedMethod",
    "stub",
    "BasicRetryHandler",
    "RetryHandler",
    "JsonUnmarshaler",
    "Unmarshaler",
]
