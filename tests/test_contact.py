import json

import pytest

from avialog.context import RequestContext
from avialog.controllers.contact import ContactController
from avialog.dto import ContactRequest, ContactResponse, to_json
from avialog.errors import InternalFailureError, NotFoundError
from avialog.models import Contact


class FakeContactService:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def _answer(self, name, *args):
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error
        return self.result

    def get_user_contacts(self, user_id):
        return self._answer("get_user_contacts", user_id)

    def insert_contact(self, user_id, request):
        return self._answer("insert_contact", user_id, request)

    def update_contact(self, user_id, contact_id, request):
        return self._answer("update_contact", user_id, contact_id, request)

    def delete_contact(self, user_id, contact_id):
        return self._answer("delete_contact", user_id, contact_id)


def _contact(contact_id, first_name, note, user_id="1"):
    return Contact(
        id=contact_id,
        user_id=user_id,
        avatar_url="https://test.com",
        first_name=first_name,
        last_name="Doe",
        company="Test Company",
        phone="[phone]",
        email_address="[email]",
        note=note,
    )


def _response(contact_id, first_name, note):
    return ContactResponse(
        id=contact_id,
        avatar_url="https://test.com",
        first_name=first_name,
        last_name="Doe",
        company="Test Company",
        phone="[phone]",
        email_address="[email]",
        note=note,
    )


@pytest.fixture
def mock_contacts():
    return [_contact(1, "John", "Test note"), _contact(2, "Jane", "Test notes")]


@pytest.fixture
def expected_contacts():
    return [_response(1, "John", "Test note"), _response(2, "Jane", "Test notes")]


@pytest.fixture
def contact_request():
    return ContactRequest(
        avatar_url="https://test.com",
        first_name="John",
        last_name="Doe",
        company="Test Company",
        phone="[phone]",
        email_address="[email]",
        note="Test note",
    )


def _ctx(body=None, params=None):
    ctx = RequestContext(body=body, params=params or {})
    ctx.set("userID", "1")
    return ctx


MISSING_FIRST_NAME = (
    '{"code":400,"message":"Key: \'ContactRequest.FirstName\' Error:Field validation '
    "for 'FirstName' failed on the 'required' tag\"}"
)


def test_get_contacts_success(mock_contacts, expected_contacts):
    service = FakeContactService(result=mock_contacts)
    ctx = _ctx()
    ContactController(service).get_contacts(ctx)
    assert ctx.status == 200
    assert json.loads(ctx.response_body) == json.loads(to_json(expected_contacts))
    assert service.calls == [("get_user_contacts", ("1",))]


def test_get_contacts_empty_is_array():
    ctx = _ctx()
    ContactController(FakeContactService(result=None)).get_contacts(ctx)
    assert ctx.status == 200
    assert ctx.response_body == "[]"


def test_get_contacts_internal_error():
    service = FakeContactService(error=InternalFailureError("invalid db"))
    ctx = _ctx()
    ContactController(service).get_contacts(ctx)
    assert ctx.status == 500
    assert ctx.response_body == '{"code":500,"message":"internal failure: invalid db"}'


def test_insert_contact_success(mock_contacts, expected_contacts, contact_request):
    service = FakeContactService(result=mock_contacts[0])
    ctx = _ctx(body=to_json(contact_request).encode())
    ContactController(service).insert_contact(ctx)
    assert ctx.status == 201
    assert json.loads(ctx.response_body) == json.loads(to_json(expected_contacts[0]))
    assert service.calls == [("insert_contact", ("1", contact_request))]


def test_insert_contact_missing_first_name(contact_request):
    contact_request.first_name = ""
    service = FakeContactService()
    ctx = _ctx(body=to_json(contact_request).encode())
    ContactController(service).insert_contact(ctx)
    assert ctx.status == 400
    assert ctx.response_body == MISSING_FIRST_NAME
    assert service.calls == []


def test_insert_contact_internal_error(contact_request):
    service = FakeContactService(error=InternalFailureError("invalid db"))
    ctx = _ctx(body=to_json(contact_request).encode())
    ContactController(service).insert_contact(ctx)
    assert ctx.status == 500
    assert ctx.response_body == '{"code":500,"message":"internal failure: invalid db"}'


def test_insert_contact_empty_body():
    ctx = _ctx(body=b"")
    ContactController(FakeContactService()).insert_contact(ctx)
    assert ctx.status == 400
    assert ctx.response_body == '{"code":400,"message":"EOF"}'


def test_update_contact_success(expected_contacts, contact_request):
    before_update = _contact(1, "John", "Test note", user_id="5")
    service = FakeContactService(result=before_update)
    ctx = _ctx(body=to_json(contact_request).encode(), params={"id": "3"})
    ContactController(service).update_contact(ctx)
    assert ctx.status == 200
    assert json.loads(ctx.response_body) == json.loads(to_json(expected_contacts[0]))
    assert service.calls == [("update_contact", ("1", 3, contact_request))]


def test_update_contact_missing_first_name(contact_request):
    contact_request.first_name = ""
    ctx = _ctx(body=to_json(contact_request).encode(), params={"id": "3"})
    ContactController(FakeContactService()).update_contact(ctx)
    assert ctx.status == 400
    assert ctx.response_body == MISSING_FIRST_NAME


def test_update_contact_bad_id():
    ctx = _ctx(params={"id": "a"})
    ContactController(FakeContactService()).update_contact(ctx)
    assert ctx.status == 400
    assert ctx.response_body == (
        '{"code":400,"message":"strconv.ParseUint: parsing \\"a\\": invalid syntax"}'
    )


def test_update_contact_not_found(contact_request):
    service = FakeContactService(error=NotFoundError("record not found"))
    ctx = _ctx(body=to_json(contact_request).encode(), params={"id": "3"})
    ContactController(service).update_contact(ctx)
    assert ctx.status == 404
    assert ctx.response_body == '{"code":404,"message":"not found: record not found"}'


def test_update_contact_internal_error(contact_request):
    service = FakeContactService(error=InternalFailureError("invalid db"))
    ctx = _ctx(body=to_json(contact_request).encode(), params={"id": "3"})
    ContactController(service).update_contact(ctx)
    assert ctx.status == 500
    assert ctx.response_body == '{"code":500,"message":"internal failure: invalid db"}'


def test_delete_contact_success():
    service = FakeContactService()
    ctx = _ctx(params={"id": "1"})
    ContactController(service).delete_contact(ctx)
    assert ctx.status == 200
    assert ctx.response_body == '{"message":"Contact deleted successfully"}'
    assert service.calls == [("delete_contact", ("1", 1))]


def test_delete_contact_bad_id():
    ctx = _ctx(params={"id": "a"})
    ContactController(FakeContactService()).delete_contact(ctx)
    assert ctx.status == 400
    assert ctx.response_body == (
        '{"code":400,"message":"strconv.ParseUint: parsing \\"a\\": invalid syntax"}'
    )


def test_delete_contact_not_found():
    service = FakeContactService(error=NotFoundError("record not found"))
    ctx = _ctx(params={"id": "1"})
    ContactController(service).delete_contact(ctx)
    assert ctx.status == 404
    assert ctx.response_body == '{"code":404,"message":"not found: record not found"}'


def test_delete_contact_internal_error():
    service = FakeContactService(error=InternalFailureError("invalid db"))
    ctx = _ctx(params={"id": "1"})
    ContactController(service).delete_contact(ctx)
    assert ctx.status == 500
    assert ctx.response_body == '{"code":500,"message":"internal failure: invalid db"}'