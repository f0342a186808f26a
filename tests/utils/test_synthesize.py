from enum import Enum
from typing import Annotated, Optional

import pytest
from pydantic import BaseModel

from restbind import (
    Body,
    BodyFieldConflict,
    CallFailure,
    FormField,
    HeaderParam,
    PathParam,
    QueryParam,
    RequestBodyConflict,
    RequestBuildFailure,
    RestBindError,
    stub,
)
from restbind._compiler import compile_stub
from restbind._utils import (
    build_request_spec,
    extract_roles,
    is_empty_value,
    stringify,
)
from restbind.models import ArgumentDescriptor, MethodDescriptor


class Color(Enum):
    RED = "red"


class ItemArgs(BaseModel):
    id: Annotated[int, PathParam("id")] = 0
    tag: Annotated[Optional[str], PathParam("tag", options="omitempty")] = None
    q: Annotated[int, QueryParam("id")] = 0
    page: Annotated[int, QueryParam("page", options="omitempty")] = 0
    color: Annotated[Optional[Color], QueryParam("color", options="omitempty")] = None
    trace: Annotated[str, HeaderParam("X-Trace", options="omitempty")] = ""


class FormArgs(BaseModel):
    user: Annotated[str, FormField("user")] = ""
    active: Annotated[bool, FormField("active", options="omitempty")] = False


class BodyArgs(BaseModel):
    body: Annotated[Optional[bytes], Body(options="omitempty")] = None


def _descriptor(path: str, *params) -> MethodDescriptor:
    return compile_stub("call", stub("GET", path, params=params, returns=(bytes, RestBindError)))


class TestHelpers:
    @pytest.mark.parametrize(
        "value", [None, False, 0, 0.0, "", b"", [], (), {}, set()]
    )
    def test_zero_values(self, value):
        assert is_empty_value(value) is True

    @pytest.mark.parametrize("value", [True, 1, -1, 0.5, "a", b"a", [0], {"a": 1}])
    def test_non_zero_values(self, value):
        assert is_empty_value(value) is False

    def test_stringify(self):
        assert stringify(1234) == "1234"
        assert stringify(True) == "true"
        assert stringify(False) == "false"
        assert stringify(b"abc") == "abc"
        assert stringify(Color.RED) == "red"
        assert stringify(None) == ""


class TestPath:
    def test_path_field(self):
        descriptor = _descriptor("/pre/{id}/post", ItemArgs)

        spec = build_request_spec(descriptor, [ItemArgs(id=1234)])

        assert spec.path == "/pre/1234/post"

    def test_positional_scalars(self):
        descriptor = _descriptor("/{0}/{2}/{1}", str, str, str)

        spec = build_request_spec(descriptor, ["a", "b", "c"])

        assert spec.path == "/a/c/b"

    def test_repeated_placeholder(self):
        descriptor = _descriptor("/{0}/{0}", int)

        spec = build_request_spec(descriptor, [7])

        assert spec.path == "/7/7"

    def test_none_scalar_substitutes_empty_string(self):
        descriptor = _descriptor("/items/{0}", Optional[str])

        spec = build_request_spec(descriptor, [None])

        assert spec.path == "/items/"

    def test_omitted_path_field_leaves_placeholder(self):
        descriptor = _descriptor("/items/{id}/{tag}", ItemArgs)

        spec = build_request_spec(descriptor, [ItemArgs(id=1)])

        assert spec.path == "/items/1/{tag}"

    def test_none_record_leaves_placeholders(self):
        descriptor = _descriptor("/items/{id}", Optional[ItemArgs])

        spec = build_request_spec(descriptor, [None])

        assert spec.path == "/items/{id}"
        assert spec.params == []
        assert spec.headers == []

    def test_mixed_scalar_and_record(self):
        descriptor = _descriptor("/{0}/items/{id}", str, ItemArgs)

        spec = build_request_spec(descriptor, ["org", ItemArgs(id=5)])

        assert spec.path == "/org/items/5"


class TestQueryAndHeaders:
    def test_query_field(self):
        descriptor = _descriptor("/items", ItemArgs)

        spec = build_request_spec(descriptor, [ItemArgs(q=1234)])

        assert ("id", "1234") in spec.params

    def test_omitempty_excludes_zero_value(self):
        descriptor = _descriptor("/items", ItemArgs)

        spec = build_request_spec(descriptor, [ItemArgs()])

        assert spec.params == [("id", "0")]
        assert spec.headers == []

    def test_omitempty_includes_non_zero_value(self):
        descriptor = _descriptor("/items", ItemArgs)

        spec = build_request_spec(
            descriptor, [ItemArgs(page=2, color=Color.RED, trace="abc")]
        )

        assert spec.params == [("id", "0"), ("page", "2"), ("color", "red")]
        assert spec.headers == [("X-Trace", "abc")]

    def test_duplicate_names_are_preserved(self):
        descriptor = _descriptor("/items", ItemArgs, ItemArgs)

        spec = build_request_spec(descriptor, [ItemArgs(q=1), ItemArgs(q=2)])

        assert spec.params == [("id", "1"), ("id", "2")]

    def test_no_body_without_body_or_form_fields(self):
        descriptor = _descriptor("/items", ItemArgs)

        spec = build_request_spec(descriptor, [ItemArgs()])

        assert spec.content is None
        assert spec.form_encoded is False


class TestBody:
    def test_body_bytes_are_sent_raw(self):
        descriptor = _descriptor("/upload", BodyArgs)

        spec = build_request_spec(descriptor, [BodyArgs(body=b'{"a": 1}')])

        assert spec.content == b'{"a": 1}'
        assert spec.form_encoded is False

    def test_omitted_body(self):
        descriptor = _descriptor("/upload", BodyArgs)

        spec = build_request_spec(descriptor, [BodyArgs(body=b"")])

        assert spec.content is None

    def test_str_body_is_utf8_encoded(self):
        class TextBody(BaseModel):
            text: Annotated[str, Body()] = ""

        descriptor = _descriptor("/upload", TextBody)

        spec = build_request_spec(descriptor, [TextBody(text="héllo")])

        assert spec.content == "héllo".encode("utf-8")

    def test_non_bytes_body_fails(self):
        class NumberBody(BaseModel):
            number: Annotated[int, Body()] = 0

        descriptor = _descriptor("/upload", NumberBody)

        with pytest.raises(RequestBuildFailure):
            build_request_spec(descriptor, [NumberBody(number=3)])

    def test_form_fields_are_url_encoded(self):
        descriptor = _descriptor("/login", FormArgs)

        spec = build_request_spec(descriptor, [FormArgs(user="a b", active=True)])

        assert spec.content == b"user=a+b&active=true"
        assert spec.form_encoded is True

    def test_body_and_form_fields_conflict_at_call_time(self):
        descriptor = MethodDescriptor(
            name="call",
            method="POST",
            path="/upload",
            arguments=(
                ArgumentDescriptor(is_structured=True, role_map=extract_roles(FormArgs)),
                ArgumentDescriptor(is_structured=True, role_map=extract_roles(BodyArgs)),
            ),
        )

        with pytest.raises(
            RequestBodyConflict, match="Body and fields are incompatible"
        ) as exc_info:
            build_request_spec(
                descriptor, [FormArgs(user="a"), BodyArgs(body=b"raw")]
            )

        assert isinstance(exc_info.value, CallFailure)
        assert isinstance(exc_info.value, BodyFieldConflict)


class TestDeterminism:
    def test_identical_inputs_produce_identical_specs(self):
        descriptor = _descriptor("/{0}/{id}", str, ItemArgs, FormArgs)
        args = ["x", ItemArgs(id=1, q=2, page=3, trace="t"), FormArgs(user="u")]

        first = build_request_spec(descriptor, args)
        second = build_request_spec(descriptor, args)

        assert first == second
        assert first.content == second.content
