"""Passenger request models.

A :class:`PassengerRequest` is built once from user input and stays
read-only for the whole reservation run.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator, model_validator

from ..core.result import Failure
from ..core.validators import (
    ValidationResult,
    validate_date,
    validate_email,
    validate_guest_password,
    validate_phone,
    validate_required,
    validate_time,
)
from ..utils.masking import mask_email, mask_phone


def _accept(result: ValidationResult) -> str:
    """Turn a validator result into a pydantic-compatible return/raise."""
    if isinstance(result, Failure):
        raise ValueError(result.error)
    return result.unwrap()


class LoginKind(str, Enum):
    """Which identifier a member logs in with."""

    MEMBER_ID = "member_id"
    EMAIL = "email"
    PHONE = "phone"


class TripQuery(BaseModel):
    """Search criteria for the train to reserve."""

    model_config = ConfigDict(frozen=True)

    departure_station: str
    arrival_station: str
    departure_time: str = Field(..., description="HH:MM")
    arrival_time: str = Field(..., description="HH:MM")
    travel_date: str = Field(..., description="YYYYMMDD")

    @field_validator("departure_station", "arrival_station")
    @classmethod
    def validate_station(cls, v: str) -> str:
        return _accept(validate_required(v, "station"))

    @field_validator("departure_time", "arrival_time")
    @classmethod
    def validate_times(cls, v: str) -> str:
        return _accept(validate_time(v))

    @field_validator("travel_date")
    @classmethod
    def validate_travel_date(cls, v: str) -> str:
        return _accept(validate_date(v))


class GuestIdentity(BaseModel):
    """Unregistered (guest) checkout details."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: Literal["unregistered"] = "unregistered"
    name: str
    phone: str
    password: SecretStr

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _accept(validate_required(v, "name"))

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v: str) -> str:
        return _accept(validate_phone(v))

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: SecretStr) -> SecretStr:
        _accept(validate_guest_password(v.get_secret_value()))
        return v

    @property
    def phone_parts(self) -> tuple:
        """Phone number split the way the guest form expects it (3-4-4)."""
        return self.phone[:3], self.phone[3:7], self.phone[7:]

    def label(self) -> str:
        return self.name


class MemberIdentity(BaseModel):
    """Logged-in checkout details."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: Literal["login"] = "login"
    login_kind: LoginKind
    login_id: str
    login_password: SecretStr

    @field_validator("login_password")
    @classmethod
    def validate_login_password(cls, v: SecretStr) -> SecretStr:
        _accept(validate_required(v.get_secret_value(), "login password"))
        return v

    @model_validator(mode="after")
    def validate_login_id_for_kind(self) -> "MemberIdentity":
        """The identifier must fit the chosen login kind."""
        if self.login_kind is LoginKind.EMAIL:
            _accept(validate_required(self.login_id, "login email"))
            _accept(validate_email(self.login_id))
        elif self.login_kind is LoginKind.PHONE:
            _accept(validate_phone(self.login_id))
        else:
            _accept(validate_required(self.login_id, "member number"))
        return self

    def label(self) -> str:
        if self.login_kind is LoginKind.EMAIL:
            return mask_email(self.login_id)
        if self.login_kind is LoginKind.PHONE:
            return mask_phone(self.login_id)
        return self.login_id


Identity = Annotated[Union[GuestIdentity, MemberIdentity], Field(discriminator="mode")]


class NotificationPreference(BaseModel):
    """Whether and where to send the outcome email."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    email: Optional[str] = None

    @model_validator(mode="after")
    def validate_address(self) -> "NotificationPreference":
        if self.enabled:
            _accept(validate_required(self.email or "", "notification email"))
            _accept(validate_email(self.email or ""))
        return self


class PassengerRequest(BaseModel):
    """Immutable input to the reservation orchestrator."""

    model_config = ConfigDict(frozen=True)

    trip: TripQuery
    identity: Identity
    notification: NotificationPreference = Field(default_factory=NotificationPreference)

    @property
    def is_guest(self) -> bool:
        return isinstance(self.identity, GuestIdentity)

    def summary(self) -> str:
        """One-line description safe for logs."""
        trip = self.trip
        who = self.identity.label() if self.is_guest else f"member {self.identity.label()}"
        return (
            f"{trip.departure_station}({trip.departure_time}) -> "
            f"{trip.arrival_station}({trip.arrival_time}) on {trip.travel_date} for {who}"
        )
