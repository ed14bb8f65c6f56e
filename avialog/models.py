"""Persistent records of the logbook: users, aircraft, contacts and flights."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

Country = str


class _StrEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


class Role(_StrEnum):
    """Role a person takes on a flight."""

    PILOT_IN_COMMAND = "PIC"
    SECOND_IN_COMMAND = "SIC"
    DUAL = "DUAL"
    STUDENT_PILOT_IN_COMMAND = "SPIC"
    PILOT_IN_COMMAND_UNDER_SUPERVISION = "P1S"
    INSTRUCTOR = "INS"
    EXAMINER = "EXM"
    FLIGHT_ATTENDANT = "ATT"
    OTHER = "OTH"


class Style(_StrEnum):
    """Flight rules a flight was flown under."""

    VFR = "VFR"
    IFR = "IFR"
    Y = "Y"
    Z = "Z"
    Z2 = "Z2"


class ApproachType(_StrEnum):
    """Kind of approach made before a landing."""

    VISUAL = "VISUAL"


def _link():
    """A navigational reference to a related record, left out of repr and equality."""
    return field(default=None, repr=False, compare=False)


@dataclass(kw_only=True)
class _Timestamps:
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class _Record(_Timestamps):
    id: int = 0


@dataclass(kw_only=True)
class _OwnedRecord(_Record):
    user_id: str
    user: User | None = _link()


@dataclass(kw_only=True)
class _PersonDetails:
    first_name: str
    last_name: str | None = None
    company: str | None = None
    phone: str | None = None
    email_address: str | None = None
    note: str | None = None


@dataclass(kw_only=True)
class _FlightTimes:
    total_block_time: timedelta | None = None
    pilot_in_command_time: timedelta | None = None
    second_in_command_time: timedelta | None = None
    dual_received_time: timedelta | None = None
    dual_given_time: timedelta | None = None
    multi_pilot_time: timedelta | None = None
    night_time: timedelta | None = None
    ifr_time: timedelta | None = None
    ifr_actual_time: timedelta | None = None
    ifr_simulated_time: timedelta | None = None
    cross_country_time: timedelta | None = None
    simulator_time: timedelta | None = None


@dataclass(kw_only=True)
class User(_Timestamps):
    """A pilot owning a logbook."""

    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str
    avatar_url: str | None = None
    signature_url: str | None = None
    country: Country | None = None
    phone: str | None = None
    street: str | None = None
    city: str | None = None
    company: str | None = None
    timezone: str | None = None
    contacts: list[Contact] = field(default_factory=list)
    aircraft: list[Aircraft] = field(default_factory=list)
    flights: list[Flight] = field(default_factory=list)


@dataclass(kw_only=True)
class Aircraft(_OwnedRecord):
    """An aircraft registered by a user."""

    registration_number: str
    aircraft_model: str
    remarks: str | None = None
    image_url: str | None = None
    flights: list[Flight] = field(default_factory=list)


@dataclass(kw_only=True)
class Contact(_OwnedRecord, _PersonDetails):
    """A person in a user's address book."""

    avatar_url: str | None = None


@dataclass(kw_only=True)
class Flight(_OwnedRecord, _FlightTimes):
    """One logbook entry."""

    aircraft_id: int
    aircraft: Aircraft | None = _link()
    passengers: list[Passenger] = field(default_factory=list)
    landings: list[Landing] = field(default_factory=list)
    takeoff_time: datetime
    takeoff_airport_code: str
    landing_time: datetime
    landing_airport_code: str
    style: Style
    my_role: Role
    remarks: str | None = None
    personal_remarks: str | None = None
    signature_url: str | None = None


@dataclass(kw_only=True)
class Passenger(_Record, _PersonDetails):
    """A person on board a flight."""

    flight_id: int
    flight: Flight | None = _link()
    role: Role


@dataclass(kw_only=True)
class Landing(_Record):
    """Landings made during a flight."""

    flight_id: int
    approach_type: ApproachType
    count: int | None = None
    night_count: int | None = None
    day_count: int | None = None
    airport_code: str | None = None