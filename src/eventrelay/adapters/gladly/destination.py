"""Synchronous entry points for the Gladly destination actions."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from eventrelay.adapters.http_resilience import ResilientClient
from eventrelay.config.gladly import get_gladly_config

from .client import GladlyClient
from .reconcile import create_conversation_item, post_conversation_item, reconcile_customer

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from eventrelay.config.gladly import GladlyConfig
    from eventrelay.config.http_resilience import ResilienceConfig

    from .reconcile import CustomerSyncResult
    from .schema import ConversationItemPayload, CustomerId, CustomerPayload


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class GladlyDestination:
    """Runs one Gladly action per call, each with its own HTTP client."""

    config: GladlyConfig = field(default_factory=get_gladly_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def sync_customer(self, payload: CustomerPayload) -> CustomerSyncResult:
        """Create the customer profile, or update the one matching the payload."""

        return asyncio.run(self._run(lambda client: reconcile_customer(client, payload)))

    def create_conversation_item(
        self,
        customer_id: CustomerId,
        payload: ConversationItemPayload,
    ) -> httpx.Response:
        return asyncio.run(
            self._run(lambda client: create_conversation_item(client, customer_id, payload))
        )

    def post_conversation_item(self, payload: ConversationItemPayload) -> httpx.Response:
        """Add a conversation item to the customer found by email or phone."""

        return asyncio.run(self._run(lambda client: post_conversation_item(client, payload)))

    async def _run[T](self, operation: Callable[[GladlyClient], Awaitable[T]]) -> T:
        async with self.client_factory(self.config.resilience) as http:
            return await operation(GladlyClient(http, base_url=self.config.url))
