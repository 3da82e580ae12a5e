"""Locate an existing Gladly customer for an action payload."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from eventrelay.errors import PayloadValidationError

if TYPE_CHECKING:
    from .schema import Customer, IdentityPayload

log = getLogger(__name__)

NO_IDENTITY_MESSAGE = "No identifying email, phone or external customer id"


@dataclass(frozen=True, slots=True)
class LookupQuery:
    """A single ``customer-profiles`` search, e.g. ``email=joe@example.com``."""

    param: str
    value: str

    def __str__(self) -> str:
        return f"{self.param}={self.value}"


class CustomerSearchClient(Protocol):
    async def find_customers(self, query: LookupQuery) -> list[Customer]: ...


def require_identity(payload: IdentityPayload) -> None:
    if not payload.has_identity:
        raise PayloadValidationError(NO_IDENTITY_MESSAGE)


def lookup_candidates(payload: IdentityPayload) -> list[LookupQuery]:
    """Return the searches for ``payload`` in priority order: email, phone, external id."""

    require_identity(payload)
    candidates: list[LookupQuery] = []
    if payload.email:
        candidates.append(LookupQuery("email", payload.email))
    if payload.phone:
        candidates.append(LookupQuery("phoneNumber", payload.phone))
    if payload.external_customer_id:
        candidates.append(LookupQuery("externalCustomerId", payload.external_customer_id))
    return candidates


async def resolve_customer(
    client: CustomerSearchClient,
    payload: IdentityPayload,
    *,
    candidates: list[LookupQuery] | None = None,
) -> Customer | None:
    """Return the first customer matched by the ``payload`` searches, or ``None``.

    Searches run one after another and stop at the first non-empty result. HTTP
    errors are not caught: a failed search ends the lookup instead of falling back
    to the next candidate.
    """

    queries = candidates if candidates is not None else lookup_candidates(payload)
    for query in queries:
        matches = await client.find_customers(query)
        if matches:
            if len(matches) > 1:
                log.info(
                    "Gladly search %s matched %s customers; using %s",
                    query.param,
                    len(matches),
                    matches[0].id,
                )
            return matches[0]
        log.debug("Gladly search %s found no customer", query.param)
    return None
