"""Gladly customer-support destination."""

from __future__ import annotations

from .client import API_VERSION, GladlyAPIError, GladlyClient
from .destination import GladlyDestination
from .lookup import LookupQuery, lookup_candidates, resolve_customer
from .normalize import normalize_email
from .reconcile import (
    CustomerSyncResult,
    create_conversation_item,
    post_conversation_item,
    reconcile_customer,
)
from .schema import (
    ActivityType,
    ConversationItemPayload,
    Customer,
    CustomerEmail,
    CustomerPayload,
    CustomerPhone,
)
from .translator import map_conversation_item, map_create_customer, map_update_customer

__all__ = [
    "API_VERSION",
    "ActivityType",
    "ConversationItemPayload",
    "Customer",
    "CustomerEmail",
    "CustomerPayload",
    "CustomerPhone",
    "CustomerSyncResult",
    "GladlyAPIError",
    "GladlyClient",
    "GladlyDestination",
    "LookupQuery",
    "create_conversation_item",
    "lookup_candidates",
    "map_conversation_item",
    "map_create_customer",
    "map_update_customer",
    "normalize_email",
    "post_conversation_item",
    "reconcile_customer",
    "resolve_customer",
]
