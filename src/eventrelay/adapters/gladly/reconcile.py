"""Create-or-update orchestration for Gladly customer profiles.

``reconcile_customer`` looks the customer up once, then either creates a new
profile or patches the one it found. Nothing is cached between calls: every
call searches again and patches from the record it just fetched.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any, Literal, Protocol

from eventrelay.errors import CustomerNotFoundError, PayloadValidationError

from .lookup import CustomerSearchClient, LookupQuery, require_identity, resolve_customer
from .translator import map_conversation_item, map_create_customer, map_update_customer

if TYPE_CHECKING:
    import httpx

    from .schema import ConversationItemPayload, CustomerId, CustomerPayload

log = getLogger(__name__)


class CustomerProfileClient(CustomerSearchClient, Protocol):
    async def create_customer(self, body: dict[str, Any]) -> httpx.Response: ...

    async def update_customer(
        self, customer_id: CustomerId, body: dict[str, Any]
    ) -> httpx.Response: ...


class ConversationItemClient(CustomerSearchClient, Protocol):
    async def create_conversation_item(
        self, customer_id: CustomerId, body: dict[str, Any]
    ) -> httpx.Response: ...


@dataclass(frozen=True, slots=True)
class CustomerSyncResult:
    """Outcome of ``reconcile_customer``.

    ``response`` is the raw Gladly response. Updates answer 204 without a body, so
    ``customer_id`` comes from the matched record there; for creates it is read
    from the response body and is ``None`` if Gladly did not echo one.
    """

    action: Literal["created", "updated"]
    customer_id: CustomerId | None
    response: httpx.Response


async def reconcile_customer(
    client: CustomerProfileClient,
    payload: CustomerPayload,
) -> CustomerSyncResult:
    require_identity(payload)

    existing = await resolve_customer(client, payload)
    if existing is None:
        response = await client.create_customer(map_create_customer(payload))
        customer_id = _created_customer_id(response)
        log.info("Created Gladly customer %s", customer_id)
        return CustomerSyncResult(action="created", customer_id=customer_id, response=response)

    body = map_update_customer(existing, payload)
    response = await client.update_customer(existing.id, body)
    changed = ", ".join(sorted(body)) or "no fields"
    log.info("Updated Gladly customer %s (%s)", existing.id, changed)
    return CustomerSyncResult(action="updated", customer_id=existing.id, response=response)


async def create_conversation_item(
    client: ConversationItemClient,
    customer_id: CustomerId,
    payload: ConversationItemPayload,
) -> httpx.Response:
    require_identity(payload)
    response = await client.create_conversation_item(customer_id, map_conversation_item(payload))
    log.info(
        "Added %s conversation item for Gladly customer %s", payload.activity_type, customer_id
    )
    return response


async def post_conversation_item(
    client: ConversationItemClient,
    payload: ConversationItemPayload,
) -> httpx.Response:
    """Find the customer by email (or phone when there is no email) and add the item."""

    if payload.email:
        query = LookupQuery("email", payload.email)
    elif payload.phone:
        query = LookupQuery("phoneNumber", payload.phone)
    else:
        raise PayloadValidationError("Conversation items need a customer email or phone")

    customer = await resolve_customer(client, payload, candidates=[query])
    if customer is None:
        raise CustomerNotFoundError(f"Unable to find Gladly customer by {query.param}")
    return await create_conversation_item(client, customer.id, payload)


def _created_customer_id(response: httpx.Response) -> CustomerId | None:
    if not response.content:
        return None
    try:
        payload = response.json()
    except ValueError:
        log.warning("Gladly create customer response is not JSON")
        return None
    if isinstance(payload, dict):
        customer_id = payload.get("id")
        if isinstance(customer_id, str):
            return customer_id
    return None
