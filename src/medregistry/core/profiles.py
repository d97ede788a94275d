from __future__ import annotations

import re
import secrets
from dataclasses import dataclass

from .errors import InvalidAddress


_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_address(value: object) -> str:
    """Validate a hex account address and return its lower-case form."""

    if not isinstance(value, str):
        raise InvalidAddress(f"address must be a string, got {type(value).__name__}")
    v = value.strip()
    if not _ADDRESS_RE.match(v):
        raise InvalidAddress(f"Malformed address: {value!r}")
    return v.lower()


def random_address() -> str:
    return "0x" + secrets.token_hex(20)


@dataclass(frozen=True)
class UserProfile:
    """Profile of a PATIENT or RESEARCHER address."""

    given_name: str
    family_name: str
    nationality: str
    contact_email: str
    registered: bool = True

    @property
    def display_name(self) -> str:
        return self.given_name + " " + self.family_name


@dataclass(frozen=True)
class HospitalProfile:
    """Profile of a HOSPITAL address.

    `verified` is the only field that changes after creation, and only the
    registry owner can change it.
    """

    name: str
    official_id: str
    physical_address: str
    registered: bool = True
    verified: bool = False
