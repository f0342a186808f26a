import types
from logging import getLogger
from typing import Any, Optional, Union, get_args, get_origin

from pydantic import BaseModel

from ..models.descriptors import FieldArg, FieldRoleMap
from ..models.errors import MultipleBodyFields
from ..models.roles import (
    ROLE_BODY,
    ROLE_FIELD,
    ROLE_HEADER,
    ROLE_PATH,
    ROLE_QUERY,
    FieldRole,
)
from .constants import LOGGER_NAME

logger = getLogger(LOGGER_NAME)


def record_type(param_type: Any) -> Optional[type[BaseModel]]:
    """Return the pydantic model behind a parameter type, if it has one.

    ``Optional[Model]`` and ``Model | None`` resolve to ``Model``.
    """
    if isinstance(param_type, type) and issubclass(param_type, BaseModel):
        return param_type

    if get_origin(param_type) in (Union, types.UnionType):
        members = [arg for arg in get_args(param_type) if arg is not type(None)]
        if len(members) == 1:
            return record_type(members[0])

    return None


def _field_role(metadata: list[Any]) -> Optional[FieldRole]:
    for item in metadata:
        if isinstance(item, FieldRole):
            return item
    return None


def extract_roles(model: type[BaseModel]) -> FieldRoleMap:
    """Group the role-annotated fields of a pydantic model by role.

    Fields without a ``FieldRole`` marker are skipped.

    Raises:
        MultipleBodyFields: If more than one field carries the body role.
    """
    path_fields: dict[str, FieldArg] = {}
    query_fields: dict[str, FieldArg] = {}
    header_fields: dict[str, FieldArg] = {}
    form_fields: dict[str, FieldArg] = {}
    body_field: Optional[tuple[str, FieldArg]] = None

    for field_name, info in model.model_fields.items():
        role = _field_role(info.metadata)
        if role is None:
            continue

        arg = FieldArg(name=role.name or field_name, omit_empty=role.omit_empty)

        if role.role == ROLE_PATH:
            path_fields[field_name] = arg
        elif role.role == ROLE_QUERY:
            query_fields[field_name] = arg
        elif role.role == ROLE_HEADER:
            header_fields[field_name] = arg
        elif role.role == ROLE_FIELD:
            form_fields[field_name] = arg
        elif role.role == ROLE_BODY:
            if body_field is not None:
                raise MultipleBodyFields()
            body_field = (field_name, arg)
        else:
            logger.warning(
                f"Ignoring unknown role '{role.role}' on {model.__name__}.{field_name}"
            )

    return FieldRoleMap(
        path_fields=path_fields,
        query_fields=query_fields,
        header_fields=header_fields,
        form_fields=form_fields,
        body_field=body_field,
    )
