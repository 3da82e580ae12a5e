"""Gladly customer profile schemas and action payloads."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

log = logging.getLogger(__name__)

type CustomerId = str
type CustomAttributes = dict[str, Any]


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class GladlyBaseModel(BaseModel):
    """Records returned by Gladly; unknown keys are kept so they round-trip on update."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "Gladly %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class CustomerEmail(GladlyBaseModel):
    original: str
    normalized: str | None = None
    primary: bool | None = None


class CustomerPhone(GladlyBaseModel):
    original: str
    normalized: str | None = None
    primary: bool | None = None
    region_code: str | None = Field(default=None, alias="regionCode")
    extension: str | None = None
    sms_preference: str | None = Field(default=None, alias="smsPreference")
    type: str | None = None


class Customer(GladlyBaseModel):
    id: CustomerId
    created_at: str = Field(alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    name: str | None = None
    image: str | None = None
    address: str | None = None
    emails: list[CustomerEmail] | None = None
    phones: list[CustomerPhone] | None = None
    external_customer_id: str | None = Field(default=None, alias="externalCustomerId")
    custom_attributes: CustomAttributes | None = Field(default=None, alias="customAttributes")


# Action payloads, as produced by the field resolver from an inbound event.


class PayloadBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class IdentityPayload(PayloadBaseModel):
    email: str | None = None
    phone: str | None = None
    external_customer_id: str | None = Field(default=None, alias="externalCustomerId")

    _blank_identity = field_validator("email", "phone", "external_customer_id", mode="before")(
        _blank_to_none
    )

    @property
    def has_identity(self) -> bool:
        return any((self.email, self.phone, self.external_customer_id))


class CustomerPayload(IdentityPayload):
    name: str | None = None
    address: str | None = None
    custom_attributes: CustomAttributes | None = Field(default=None, alias="customAttributes")
    override: bool = False


class ActivityType(StrEnum):
    EMAIL = "EMAIL"
    SMS = "SMS"
    ISSUE = "ISSUE"
    SURVEY = "SURVEY"


class ConversationItemPayload(IdentityPayload):
    title: str
    body: str
    activity_type: ActivityType = Field(alias="activityType")
    source_name: str = Field(alias="sourceName")


# Request bodies. Absent fields are dropped on serialisation, never sent as null.


class WireBody(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CustomerProfileBody(WireBody):
    name: str | None = None
    address: str | None = None
    emails: list[CustomerEmail] | None = None
    phones: list[CustomerPhone] | None = None
    custom_attributes: CustomAttributes | None = Field(default=None, alias="customAttributes")


class ConversationCustomer(WireBody):
    email_address: str | None = Field(default=None, alias="emailAddress")
    mobile_phone: str | None = Field(default=None, alias="mobilePhone")


class ConversationContent(WireBody):
    type: Literal["CUSTOMER_ACTIVITY"] = "CUSTOMER_ACTIVITY"
    title: str
    body: str
    activity_type: ActivityType = Field(alias="activityType")
    source_name: str = Field(alias="sourceName")


class ConversationItemBody(WireBody):
    customer: ConversationCustomer
    content: ConversationContent
