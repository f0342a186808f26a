from enum import Enum
from typing import Any, Sequence
from urllib.parse import urlencode

from ..models.descriptors import FieldArg, MethodDescriptor
from ..models.errors import RequestBodyConflict, RequestBuildFailure
from ._request_spec import RequestSpec

_MISSING = object()


def is_empty_value(value: Any) -> bool:
    """Whether a value counts as its type's zero value for ``omitempty``."""
    if value is None or value is _MISSING:
        return True
    if isinstance(value, (bool, int, float)):
        return not value
    if isinstance(value, (str, bytes, bytearray, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def stringify(value: Any) -> str:
    if value is None or value is _MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _skip(value: Any, arg: FieldArg) -> bool:
    return value is _MISSING or (arg.omit_empty and is_empty_value(value))


def _collect_pairs(
    record: Any, fields: dict[str, FieldArg], into: list[tuple[str, str]]
) -> None:
    for field_name, arg in fields.items():
        value = getattr(record, field_name, _MISSING)
        if _skip(value, arg):
            continue
        into.append((arg.name, stringify(value)))


def _body_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise RequestBuildFailure(
        f"Body field must hold bytes or str, got {type(value).__name__}"
    )


def build_request_spec(descriptor: MethodDescriptor, args: Sequence[Any]) -> RequestSpec:
    """Synthesize a request from a stub descriptor and the call arguments.

    Scalar arguments fill the ``{index}`` placeholder matching their position.
    Structured arguments contribute their role-annotated fields. Path
    placeholders that receive no value are left in place.

    Raises:
        RequestBodyConflict: If form fields and a body field were both present.
        RequestBuildFailure: If a body field does not hold bytes or str.
    """
    path = descriptor.path
    params: list[tuple[str, str]] = []
    headers: list[tuple[str, str]] = []
    form: list[tuple[str, str]] = []
    content = None

    for index, (arg_descriptor, value) in enumerate(zip(descriptor.arguments, args)):
        role_map = arg_descriptor.role_map
        if not arg_descriptor.is_structured or role_map is None:
            path = path.replace(f"{{{index}}}", stringify(value))
            continue

        record = _MISSING if value is None else value

        for field_name, arg in role_map.path_fields.items():
            field_value = getattr(record, field_name, _MISSING)
            if _skip(field_value, arg):
                continue
            path = path.replace(f"{{{arg.name}}}", stringify(field_value))

        _collect_pairs(record, role_map.query_fields, params)
        _collect_pairs(record, role_map.header_fields, headers)
        _collect_pairs(record, role_map.form_fields, form)

        if role_map.body_field is not None:
            field_name, arg = role_map.body_field
            field_value = getattr(record, field_name, _MISSING)
            if not _skip(field_value, arg) and field_value is not None:
                content = _body_bytes(field_value)

    form_encoded = False
    if form:
        if content is not None:
            raise RequestBodyConflict("Body and fields are incompatible.")
        content = urlencode(form).encode("ascii")
        form_encoded = True

    return RequestSpec(
        method=descriptor.method,
        path=path,
        params=params,
        headers=headers,
        content=content,
        form_encoded=form_encoded,
    )
