from __future__ import annotations

from .errors import (
    AlreadyRegistered,
    InvalidAddress,
    InvalidRoleRequested,
    NotAHospital,
    NotFound,
    RegistryError,
    Unauthorized,
)
from .events import EntityRegistered, Event, EventLog, HospitalVerified
from .profiles import HospitalProfile, UserProfile, normalize_address
from .registry import InMemoryRegistry
from .roles import Role

__all__ = [
    "AlreadyRegistered",
    "InvalidAddress",
    "InvalidRoleRequested",
    "NotAHospital",
    "NotFound",
    "RegistryError",
    "Unauthorized",
    "EntityRegistered",
    "Event",
    "EventLog",
    "HospitalVerified",
    "HospitalProfile",
    "UserProfile",
    "normalize_address",
    "InMemoryRegistry",
    "Role",
]
