from .descriptors import (
    HTTP_METHODS,
    ArgumentDescriptor,
    CallResult,
    FieldArg,
    FieldRoleMap,
    MethodDescriptor,
    StubDeclaration,
    stub,
)
from .errors import (
    BodyFieldConflict,
    CallFailure,
    CompileError,
    DecodeFailure,
    InvalidSignature,
    MultipleBodyFields,
    RequestBodyConflict,
    RequestBuildFailure,
    RestBindError,
    StatusFailure,
    TransportFailure,
    UnsupportedMethod,
)
from .roles import (
    Body,
    FieldRole,
    FormField,
    HeaderParam,
    PathParam,
    QueryParam,
)

__all__ = [
    "HTTP_METHODS",
    "ArgumentDescriptor",
    "CallResult",
    "FieldArg",
    "FieldRoleMap",
    "MethodDescriptor",
    "StubDeclaration",
    "stub",
    "BodyFieldConflict",
    "CallFailure",
    "CompileError",
    "DecodeFailure",
    "InvalidSignature",
    "MultipleBodyFields",
    "RequestBodyConflict",
    "RequestBuildFailure",
    "RestBindError",
    "StatusFailure",
    "TransportFailure",
    "UnsupportedMethod",
    "Body",
    "FieldRole",
    "FormField",
    "HeaderParam",
    "PathParam",
    "QueryParam",
]
