"""HTTP client for the Gladly REST API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, Final

from pydantic import TypeAdapter, ValidationError

from eventrelay.errors import UnexpectedStatusError

from .schema import Customer

if TYPE_CHECKING:
    import httpx

    from eventrelay.adapters.http_resilience import ResilientClient

    from .lookup import LookupQuery
    from .schema import CustomerId

log = getLogger(__name__)

API_VERSION: Final[str] = "/api/v1/"

CUSTOMER_PROFILES = "customer-profiles"
CUSTOMER_PROFILE = "customer-profiles/{id}"
CONVERSATION_ITEMS = "customers/{id}/conversation-items"

_customer_list = TypeAdapter(list[Customer])


class GladlyAPIError(RuntimeError):
    """Raised when Gladly answers with a payload this client cannot interpret."""


class GladlyClient:
    """Low-level client for the customer profile and conversation endpoints.

    Every operation raises ``httpx.HTTPStatusError`` for a non-2xx answer. Writes
    also raise ``UnexpectedStatusError`` for a 2xx answer other than the documented
    one (201 for create, 204 for update, 200 for conversation items).
    """

    def __init__(self, http: ResilientClient, *, base_url: str) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")

    def url_for(self, resource: str) -> str:
        return f"{self._base_url}{API_VERSION}{resource}"

    async def find_customers(self, query: LookupQuery) -> list[Customer]:
        response = await self._http.get(
            self.url_for(CUSTOMER_PROFILES),
            params={query.param: query.value},
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise GladlyAPIError("Gladly customer search did not answer with JSON") from exc
        if not isinstance(payload, list):
            raise GladlyAPIError("Unexpected Gladly customer search payload")
        try:
            return _customer_list.validate_python(payload)
        except ValidationError as exc:
            raise GladlyAPIError(f"Invalid Gladly customer record: {exc}") from exc

    async def create_customer(self, body: dict[str, Any]) -> httpx.Response:
        response = await self._http.post(self.url_for(CUSTOMER_PROFILES), json=body)
        _check_status(response, expected=201, action="create customer profile")
        return response

    async def update_customer(
        self,
        customer_id: CustomerId,
        body: dict[str, Any],
    ) -> httpx.Response:
        response = await self._http.patch(
            self.url_for(CUSTOMER_PROFILE.format(id=customer_id)),
            json=body,
        )
        _check_status(response, expected=204, action="update customer profile")
        return response

    async def create_conversation_item(
        self,
        customer_id: CustomerId,
        body: dict[str, Any],
    ) -> httpx.Response:
        response = await self._http.post(
            self.url_for(CONVERSATION_ITEMS.format(id=customer_id)),
            json=body,
        )
        _check_status(response, expected=200, action="create customer conversation item")
        return response


def _check_status(response: httpx.Response, *, expected: int, action: str) -> None:
    response.raise_for_status()
    if response.status_code != expected:
        log.error(
            "Gladly answered %s with status %s (expected %s)",
            action,
            response.status_code,
            expected,
        )
        raise UnexpectedStatusError(
            f"Unable to {action}: status {response.status_code}",
            expected=expected,
            response=response,
        )
