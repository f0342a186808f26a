from functools import lru_cache
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from .models.errors import DecodeFailure


@runtime_checkable
class Unmarshaler(Protocol):
    def unmarshal(self, data: bytes, target_type: Any) -> Any: ...


@lru_cache(maxsize=256)
def _cached_adapter(target_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target_type)


def _adapter(target_type: Any) -> TypeAdapter[Any]:
    try:
        hash(target_type)
    except TypeError:
        return TypeAdapter(target_type)
    return _cached_adapter(target_type)


class JsonUnmarshaler:
    """Decodes JSON response bodies with pydantic.

    ``target_type`` may be anything pydantic can validate: models, builtin
    containers such as ``list[Repo]``, or ``Any`` for plain JSON values.
    """

    def unmarshal(self, data: bytes, target_type: Any) -> Any:
        adapter = _adapter(target_type)
        try:
            return adapter.validate_json(data)
        except ValidationError as e:
            raise DecodeFailure(str(e)) from e
