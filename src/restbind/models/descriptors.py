from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import RestBindError

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")


class FieldArg(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    omit_empty: bool = False


class FieldRoleMap(BaseModel):
    """Role-grouped fields of one record type, keyed by field identifier."""

    model_config = ConfigDict(frozen=True)

    path_fields: dict[str, FieldArg] = Field(default_factory=dict)
    query_fields: dict[str, FieldArg] = Field(default_factory=dict)
    header_fields: dict[str, FieldArg] = Field(default_factory=dict)
    form_fields: dict[str, FieldArg] = Field(default_factory=dict)
    body_field: Optional[tuple[str, FieldArg]] = None


class ArgumentDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_structured: bool = False
    role_map: Optional[FieldRoleMap] = None


class MethodDescriptor(BaseModel):
    """Compiled, immutable metadata for one stub."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    method: str
    path: str = ""
    arguments: tuple[ArgumentDescriptor, ...] = ()
    payload_type: Any = bytes
    has_body: bool = False
    is_streaming: bool = False
    origin: Optional[str] = None

    @property
    def has_form_fields(self) -> bool:
        return any(
            arg.role_map is not None and len(arg.role_map.form_fields) > 0
            for arg in self.arguments
        )


class StubDeclaration(BaseModel):
    """Declaration of one remote endpoint.

    ``returns`` is the result shape ``(payload type, failure type)``; it is
    validated when the owning service is compiled, not here.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: Optional[str] = None
    path: str = ""
    params: tuple[Any, ...] = ()
    returns: Any = (bytes, RestBindError)
    origin: Optional[str] = None


def stub(
    method: Optional[str],
    path: str = "",
    *,
    params: Any = (),
    returns: Any = (bytes, RestBindError),
    origin: Optional[str] = None,
) -> StubDeclaration:
    """Declare a stub as a class attribute of a ``Service``.

    Examples:
        ```python
        class RepoService(Service):
            list_repos = stub(
                "GET", "/users/{0}/repos", params=[str], returns=(list[Repo], RestBindError)
            )
        ```
    """
    return StubDeclaration(
        method=method,
        path=path,
        params=tuple(params),
        returns=returns,
        origin=origin,
    )


class CallResult(NamedTuple):
    """Outcome of a stub call. Exactly one of the two slots is meaningful."""

    payload: Any
    failure: Optional[RestBindError]

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> Any:
        if self.failure is not None:
            raise self.failure
        return self.payload
