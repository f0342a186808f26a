from typing import Any, Optional

import pytest
from pydantic import BaseModel

from restbind import DecodeFailure, JsonUnmarshaler, Unmarshaler


class Repo(BaseModel):
    id: int
    name: str
    description: Optional[str] = None


class TestJsonUnmarshaler:
    def test_is_an_unmarshaler(self):
        assert isinstance(JsonUnmarshaler(), Unmarshaler)

    def test_model(self):
        repo = JsonUnmarshaler().unmarshal(b'{"id": 1, "name": "hello"}', Repo)

        assert repo == Repo(id=1, name="hello")

    def test_container_of_models(self):
        repos = JsonUnmarshaler().unmarshal(
            b'[{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]', list[Repo]
        )

        assert [repo.id for repo in repos] == [1, 2]

    def test_any(self):
        value = JsonUnmarshaler().unmarshal(b'{"a": [1, 2]}', Any)

        assert value == {"a": [1, 2]}

    def test_invalid_json(self):
        with pytest.raises(DecodeFailure):
            JsonUnmarshaler().unmarshal(b"not json", Repo)

    def test_wrong_shape(self):
        with pytest.raises(DecodeFailure):
            JsonUnmarshaler().unmarshal(b'{"id": "x"}', Repo)
