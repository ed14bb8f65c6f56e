import json

import pytest

from avialog.context import USER_ID, RequestContext, error_response, parse_id
from avialog.errors import InternalFailureError, NotFoundError


@pytest.mark.parametrize(("text", "value"), [("1", 1), ("4294967295", 4294967295)])
def test_parse_id_accepts_digits(text, value):
    assert parse_id(text) == value


@pytest.mark.parametrize("text", ["a", "", "-1", "1.5", " 1"])
def test_parse_id_rejects_bad_syntax(text):
    with pytest.raises(ValueError) as info:
        parse_id(text)
    assert str(info.value) == f'strconv.ParseUint: parsing "{text}": invalid syntax'


def test_parse_id_rejects_out_of_range():
    with pytest.raises(ValueError, match="value out of range$"):
        parse_id("4294967296")


def test_values_and_string_lookup():
    ctx = RequestContext()
    ctx.set(USER_ID, "1")
    ctx.set("count", 3)
    assert ctx.get_string("userID") == "1"
    assert ctx.get_string("count") == ""
    assert ctx.get_string("missing") == ""


def test_param_and_header_lookup():
    ctx = RequestContext(params={"id": "3"}, headers={"Authorization": "Bearer token"})
    assert (ctx.param("id"), ctx.param("other")) == ("3", "")
    assert (ctx.header("authorization"), ctx.header("Accept")) == ("Bearer token", "")


def test_json_writes_status_and_body():
    ctx = RequestContext()
    ctx.json(200, {"message": "Contact deleted successfully"})
    assert (ctx.status, ctx.response_body) == (200, '{"message":"Contact deleted successfully"}')


def _bad_id_error():
    with pytest.raises(ValueError) as info:
        parse_id("a")
    return info.value


@pytest.mark.parametrize(
    ("status", "make_error", "expected"),
    [
        (500, InternalFailureError, {"code": 500, "message": "internal failure"}),
        (404, lambda: NotFoundError("record not found"), {"code": 404, "message": "not found: record not found"}),
        (400, _bad_id_error, {"code": 400, "message": 'strconv.ParseUint: parsing "a": invalid syntax'}),
    ],
)
def test_error_response_body(status, make_error, expected):
    ctx = RequestContext()
    error_response(ctx, status, make_error())
    assert ctx.status == status
    assert json.loads(ctx.response_body) == expected


def test_error_response_is_compact():
    ctx = RequestContext()
    error_response(ctx, 500, InternalFailureError())
    assert ctx.response_body == '{"code":500,"message":"internal failure"}'


def test_abort_marks_context():
    ctx = RequestContext()
    assert ctx.aborted is False
    ctx.abort()
    assert ctx.aborted is True