"""Translate action payloads into Gladly request bodies.

Every function here is pure: the existing customer record handed to
``map_update_customer`` is read, never modified, so the same record can be
mapped again with another payload and give the same result.

Customer profile updates use patch semantics on the Gladly side: a key that is
left out of the body keeps its remote value. The update mapper therefore emits
only the keys the payload asks to change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .normalize import normalize_email
from .schema import (
    ConversationContent,
    ConversationCustomer,
    ConversationItemBody,
    CustomerEmail,
    CustomerPhone,
    CustomerProfileBody,
)

if TYPE_CHECKING:
    from .schema import (
        ConversationItemPayload,
        CustomAttributes,
        Customer,
        CustomerPayload,
    )


def map_conversation_item(payload: ConversationItemPayload) -> dict[str, Any]:
    """Build the body for ``POST customers/{id}/conversation-items``.

    The customer is addressed by email when one is given, otherwise by mobile phone.
    """

    customer = (
        ConversationCustomer(email_address=payload.email)
        if payload.email
        else ConversationCustomer(mobile_phone=payload.phone)
    )
    body = ConversationItemBody(
        customer=customer,
        content=ConversationContent(
            title=payload.title,
            body=payload.body,
            activity_type=payload.activity_type,
            source_name=payload.source_name,
        ),
    )
    return body.to_wire()


def map_create_customer(payload: CustomerPayload) -> dict[str, Any]:
    """Build the body for ``POST customer-profiles``."""

    body = CustomerProfileBody(
        name=payload.name,
        address=payload.address,
        emails=[_new_email(payload.email)] if payload.email else None,
        phones=[_new_phone(payload.phone)] if payload.phone else None,
        custom_attributes=(
            dict(payload.custom_attributes) if payload.custom_attributes is not None else None
        ),
    )
    return body.to_wire()


def map_update_customer(existing: Customer, payload: CustomerPayload) -> dict[str, Any]:
    """Build the body for ``PATCH customer-profiles/{id}``.

    Without ``override`` the body is empty. With it, ``name`` and ``address`` are
    sent only when the payload has them; ``emails`` and ``phones`` are sent only
    when the payload carries that identity field, as the existing list plus the new
    entry unless it is already listed; ``customAttributes`` is sent only when the
    payload has attributes, merged over the existing ones.
    """

    if not payload.override:
        return {}

    body = CustomerProfileBody(
        name=payload.name,
        address=payload.address,
        emails=merge_emails(existing.emails, payload.email) if payload.email else None,
        phones=merge_phones(existing.phones, payload.phone) if payload.phone else None,
        custom_attributes=(
            merge_custom_attributes(existing.custom_attributes, payload.custom_attributes)
            if payload.custom_attributes is not None
            else None
        ),
    )
    return body.to_wire()


def merge_emails(existing: list[CustomerEmail] | None, email: str) -> list[CustomerEmail]:
    """Return ``existing`` with ``email`` appended unless an entry already matches.

    An entry matches when its ``normalized`` value equals the normalized email, or
    when its ``original`` value equals the raw email.
    """

    merged = list(existing or [])
    normalized = normalize_email(email)
    for entry in merged:
        if entry.normalized == normalized or entry.original == email:
            return merged
    merged.append(_new_email(email))
    return merged


def merge_phones(existing: list[CustomerPhone] | None, phone: str) -> list[CustomerPhone]:
    """Return ``existing`` with ``phone`` appended unless an entry has the same ``original``."""

    merged = list(existing or [])
    if any(entry.original == phone for entry in merged):
        return merged
    merged.append(_new_phone(phone))
    return merged


def merge_custom_attributes(
    existing: CustomAttributes | None,
    incoming: CustomAttributes,
) -> CustomAttributes:
    return {**(existing or {}), **incoming}


def _new_email(email: str) -> CustomerEmail:
    return CustomerEmail(original=email, primary=False)


def _new_phone(phone: str) -> CustomerPhone:
    return CustomerPhone(original=phone, primary=False)
