from logging import getLogger
from typing import Any

from ._services._streaming import StreamingConnection
from ._utils import extract_roles, record_type
from ._utils.constants import LOGGER_NAME
from .models.descriptors import (
    HTTP_METHODS,
    ArgumentDescriptor,
    MethodDescriptor,
    StubDeclaration,
)
from .models.errors import (
    BodyFieldConflict,
    InvalidSignature,
    MultipleBodyFields,
    UnsupportedMethod,
)

logger = getLogger(LOGGER_NAME)


def _is_failure_type(value: Any) -> bool:
    return isinstance(value, type) and issubclass(value, Exception)


def compile_stub(name: str, declaration: StubDeclaration) -> MethodDescriptor:
    """Validate one stub declaration and compile it into a descriptor.

    Raises:
        InvalidSignature: If the result shape is not ``(payload, failure)``,
            or a streaming stub declares no origin.
        UnsupportedMethod: If the verb is not GET, POST, PUT or DELETE.
        MultipleBodyFields: If more than one body field is declared.
        BodyFieldConflict: If form fields are declared alongside a body field.
    """
    returns = declaration.returns
    if not isinstance(returns, (tuple, list)) or len(returns) != 2:
        raise InvalidSignature(f"{name}: stubs must return two values")

    payload_type, failure_type = returns
    if not _is_failure_type(failure_type):
        raise InvalidSignature(f"{name}: second return value must be an error type")

    is_streaming = payload_type is StreamingConnection
    if is_streaming and not declaration.origin:
        raise InvalidSignature(f"{name}: streaming stubs require an origin")

    if declaration.method not in HTTP_METHODS:
        raise UnsupportedMethod(declaration.method)

    arguments: list[ArgumentDescriptor] = []
    has_body = False
    for param_type in declaration.params:
        model = record_type(param_type)
        if model is None:
            arguments.append(ArgumentDescriptor())
            continue

        role_map = extract_roles(model)
        if role_map.body_field is not None:
            if has_body:
                raise MultipleBodyFields()
            has_body = True
        arguments.append(ArgumentDescriptor(is_structured=True, role_map=role_map))

    descriptor = MethodDescriptor(
        name=name,
        method=declaration.method,
        path=declaration.path,
        arguments=tuple(arguments),
        payload_type=payload_type,
        has_body=has_body,
        is_streaming=is_streaming,
        origin=declaration.origin if is_streaming else None,
    )

    if descriptor.has_body and descriptor.has_form_fields:
        raise BodyFieldConflict()

    return descriptor


def declared_stubs(service_type: type) -> dict[str, StubDeclaration]:
    """Collect the stub declarations of a service class and its bases.

    Attributes that are not stub declarations are ignored.
    """
    stubs: dict[str, StubDeclaration] = {}
    for klass in reversed(service_type.__mro__):
        for attr_name, value in vars(klass).items():
            if isinstance(value, StubDeclaration):
                stubs[attr_name] = value
            else:
                stubs.pop(attr_name, None)
    return stubs


def compile_service(service_type: type) -> dict[str, MethodDescriptor]:
    """Compile every stub of a service class.

    The first error aborts compilation of the whole service.
    """
    descriptors: dict[str, MethodDescriptor] = {}
    for name, declaration in declared_stubs(service_type).items():
        descriptors[name] = compile_stub(name, declaration)
        logger.debug(
            f"Compiled stub {service_type.__name__}.{name}: "
            f"{declaration.method} {declaration.path}"
        )
    return descriptors
