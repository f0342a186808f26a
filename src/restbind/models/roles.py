from dataclasses import dataclass
from typing import Optional

ROLE_PATH = "path"
ROLE_FIELD = "field"
ROLE_QUERY = "query"
ROLE_HEADER = "header"
ROLE_BODY = "body"

OPTION_OMIT_EMPTY = "omitempty"


@dataclass(frozen=True)
class FieldRole:
    """Places a record field's value in an outgoing request.

    Attach it to a pydantic model field with ``typing.Annotated``:

    ```python
    class GetRepo(BaseModel):
        owner: Annotated[str, PathParam("owner")]
        page: Annotated[int, QueryParam(options="omitempty")] = 0
    ```

    Args:
        role: One of ``path``, ``field``, ``query``, ``header`` or ``body``.
        name: External name of the value. Defaults to the field name.
        options: Comma-separated flags. ``omitempty`` drops zero values.
    """

    role: str
    name: Optional[str] = None
    options: str = ""

    @property
    def omit_empty(self) -> bool:
        return OPTION_OMIT_EMPTY in [opt.strip() for opt in self.options.split(",")]


def PathParam(name: Optional[str] = None, options: str = "") -> FieldRole:
    return FieldRole(ROLE_PATH, name, options)


def QueryParam(name: Optional[str] = None, options: str = "") -> FieldRole:
    return FieldRole(ROLE_QUERY, name, options)


def HeaderParam(name: Optional[str] = None, options: str = "") -> FieldRole:
    return FieldRole(ROLE_HEADER, name, options)


def FormField(name: Optional[str] = None, options: str = "") -> FieldRole:
    return FieldRole(ROLE_FIELD, name, options)


def Body(options: str = "") -> FieldRole:
    return FieldRole(ROLE_BODY, None, options)
