"""End-to-end Gladly actions through the synchronous destination facade."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from eventrelay.adapters.gladly.schema import ConversationItemPayload, CustomerPayload
from eventrelay.errors import CustomerNotFoundError
from tests.support.gladly import json_body

if TYPE_CHECKING:
    from eventrelay.adapters.gladly import GladlyDestination
    from tests.support.gladly import FakeGladly

EMAIL = "joe.bob@gladly.com"
PHONE = "2345678901"
EXTERNAL_ID = "123"


def _customer_payload(**fields: object) -> CustomerPayload:
    data: dict[str, object] = {
        "name": "Joe Bob",
        "email": EMAIL,
        "phone": PHONE,
        "externalCustomerId": EXTERNAL_ID,
        "address": "123 Test St. New York City NY US 10001",
        "customAttributes": {"tier": "vip"},
    }
    data.update(fields)
    return CustomerPayload.model_validate(data)


def test_creates_customer_when_no_profile_matches(
    destination: GladlyDestination, fake_gladly: FakeGladly
) -> None:
    fake_gladly.on("GET", "customer-profiles", params={"email": EMAIL}, body=[])
    fake_gladly.on("GET", "customer-profiles", params={"phoneNumber": PHONE}, body=[])
    fake_gladly.on("GET", "customer-profiles", params={"externalCustomerId": EXTERNAL_ID}, body=[])
    fake_gladly.on("POST", "customer-profiles", status=201, body={"id": "c-1"})

    result = destination.sync_customer(_customer_payload())

    assert result.action == "created"
    assert result.customer_id == "c-1"
    assert [request.method for request in fake_gladly.requests] == ["GET", "GET", "GET", "POST"]
    assert json_body(fake_gladly.sent("POST")[0]) == {
        "name": "Joe Bob",
        "address": "123 Test St. New York City NY US 10001",
        "emails": [{"original": EMAIL, "primary": False}],
        "phones": [{"original": PHONE, "primary": False}],
        "customAttributes": {"tier": "vip"},
    }


def test_updates_customer_found_by_email(
    destination: GladlyDestination, fake_gladly: FakeGladly
) -> None:
    fake_gladly.on(
        "GET",
        "customer-profiles",
        params={"email": EMAIL},
        body=[
            {
                "id": "123",
                "createdAt": "2022-07-11T00:00:00Z",
                "name": "Joe",
                "emails": [{"original": EMAIL, "normalized": EMAIL, "primary": True}],
                "customAttributes": {"tier": "regular", "region": "us"},
            }
        ],
    )
    fake_gladly.on("PATCH", "customer-profiles/123", status=204)

    result = destination.sync_customer(_customer_payload(override=True))

    assert result.action == "updated"
    assert result.customer_id == "123"
    assert [request.method for request in fake_gladly.requests] == ["GET", "PATCH"]
    assert json_body(fake_gladly.sent("PATCH")[0]) == {
        "name": "Joe Bob",
        "address": "123 Test St. New York City NY US 10001",
        "emails": [{"original": EMAIL, "normalized": EMAIL, "primary": True}],
        "phones": [{"original": PHONE, "primary": False}],
        "customAttributes": {"tier": "vip", "region": "us"},
    }


def test_update_without_override_patches_nothing(
    destination: GladlyDestination, fake_gladly: FakeGladly
) -> None:
    fake_gladly.on(
        "GET",
        "customer-profiles",
        params={"email": EMAIL},
        body=[{"id": "123", "createdAt": "2022-07-11T00:00:00Z"}],
    )
    fake_gladly.on("PATCH", "customer-profiles/123", status=204)

    destination.sync_customer(_customer_payload())

    assert json_body(fake_gladly.sent("PATCH")[0]) == {}
    assert fake_gladly.sent("POST") == []


def test_failed_lookup_stops_the_action(
    destination: GladlyDestination, fake_gladly: FakeGladly
) -> None:
    fake_gladly.on("GET", "customer-profiles", params={"email": EMAIL}, status=400)

    with pytest.raises(httpx.HTTPStatusError):
        destination.sync_customer(_customer_payload())

    assert len(fake_gladly.requests) == 1


def test_failed_create_raises(destination: GladlyDestination, fake_gladly: FakeGladly) -> None:
    fake_gladly.on("GET", "customer-profiles", params={"email": EMAIL}, body=[])
    fake_gladly.on("POST", "customer-profiles", status=400, body={"error": "error"})

    with pytest.raises(httpx.HTTPStatusError):
        destination.sync_customer(_customer_payload(phone=None, externalCustomerId=None))


def test_posts_conversation_item_for_found_customer(
    destination: GladlyDestination, fake_gladly: FakeGladly
) -> None:
    fake_gladly.on(
        "GET",
        "customer-profiles",
        params={"email": EMAIL},
        body=[{"id": "123", "createdAt": "2022-07-11T00:00:00Z"}],
    )
    fake_gladly.on("POST", "customers/123/conversation-items", status=200, body={})
    payload = ConversationItemPayload.model_validate(
        {
            "email": EMAIL,
            "phone": PHONE,
            "title": "Test Event",
            "body": "test body for event",
            "activityType": "EMAIL",
            "sourceName": "Test",
        }
    )

    response = destination.post_conversation_item(payload)

    assert response.status_code == 200
    assert json_body(fake_gladly.sent("POST")[0]) == {
        "customer": {"emailAddress": EMAIL},
        "content": {
            "type": "CUSTOMER_ACTIVITY",
            "title": "Test Event",
            "body": "test body for event",
            "activityType": "EMAIL",
            "sourceName": "Test",
        },
    }


def test_conversation_item_for_unknown_customer(
    destination: GladlyDestination, fake_gladly: FakeGladly
) -> None:
    fake_gladly.on("GET", "customer-profiles", params={"phoneNumber": PHONE}, body=[])
    payload = ConversationItemPayload.model_validate(
        {"phone": PHONE, "title": "t", "body": "b", "activityType": "SMS", "sourceName": "s"}
    )

    with pytest.raises(CustomerNotFoundError):
        destination.post_conversation_item(payload)


def test_conversation_item_for_known_customer_id(
    destination: GladlyDestination, fake_gladly: FakeGladly
) -> None:
    fake_gladly.on("POST", "customers/c-9/conversation-items", status=200, body={})
    payload = ConversationItemPayload.model_validate(
        {"phone": PHONE, "title": "t", "body": "b", "activityType": "SMS", "sourceName": "s"}
    )

    destination.create_conversation_item("c-9", payload)

    assert [request.method for request in fake_gladly.requests] == ["POST"]
