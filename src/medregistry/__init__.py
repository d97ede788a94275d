from __future__ import annotations

from .core import (
    AlreadyRegistered,
    HospitalProfile,
    InMemoryRegistry,
    InvalidAddress,
    InvalidRoleRequested,
    NotAHospital,
    NotFound,
    RegistryError,
    Role,
    Unauthorized,
    UserProfile,
)
from .runtime.server import RegistryServer, run
from .sdk.client import RegistryClient

__all__ = [
    "run",
    "RegistryServer",
    "RegistryClient",
    "InMemoryRegistry",
    "Role",
    "UserProfile",
    "HospitalProfile",
    "RegistryError",
    "Unauthorized",
    "AlreadyRegistered",
    "InvalidRoleRequested",
    "NotAHospital",
    "NotFound",
    "InvalidAddress",
]
