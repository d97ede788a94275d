from __future__ import annotations

import logging
import threading
import time
from dataclasses import replace
from typing import Any

from .errors import AlreadyRegistered, InvalidRoleRequested, NotAHospital, NotFound, Unauthorized
from .events import EventLog
from .profiles import HospitalProfile, UserProfile, normalize_address, random_address
from .roles import Role, is_self_assignable_user_role, profile_kind

_LOGGER = logging.getLogger(__name__)

ADMIN_DISPLAY_NAME = "Administrator"


class InMemoryRegistry:
    """Role and profile registry for a single owner.

    Every public method validates its inputs and preconditions before touching
    state, so a rejected call leaves the registry exactly as it was. Mutations
    and reads share one lock; profiles handed out are frozen snapshots.
    """

    def __init__(self, owner: str | None = None, *, address: str | None = None) -> None:
        self._lock = threading.RLock()
        self._owner = normalize_address(owner) if owner is not None else random_address()
        self._address = normalize_address(address) if address is not None else random_address()
        self._created_at = time.time()
        self._roles: dict[str, Role] = {}
        self._users: dict[str, UserProfile] = {}
        self._hospitals: dict[str, HospitalProfile] = {}
        self.events = EventLog()

        with self._lock:
            self._roles[self._owner] = Role.ADMIN
            self.events.entity_registered(self._owner, Role.ADMIN, ADMIN_DISPLAY_NAME)
        _LOGGER.info("registry %s initialized, owner %s", self._address, self._owner)

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def address(self) -> str:
        return self._address

    def describe(self) -> dict[str, Any]:
        with self._lock:
            return {
                "address": self._address,
                "owner": self._owner,
                "createdAt": float(self._created_at),
                "globalRevision": self.events.revision(),
            }

    def _role_locked(self, address: str) -> Role:
        return self._roles.get(address, Role.NONE)

    @staticmethod
    def _require_text(**fields: object) -> None:
        for name, value in fields.items():
            if not isinstance(value, str):
                raise TypeError(f"{name} must be a string, got {type(value).__name__}")

    def _require_unregistered_locked(self, address: str) -> None:
        current = self._role_locked(address)
        if current is not Role.NONE:
            raise AlreadyRegistered(f"Address {address} already has role {current.value}")

    def register_user(
        self,
        caller: str,
        given_name: str,
        family_name: str,
        nationality: str,
        contact_email: str,
        role: Role | str | int,
    ) -> UserProfile:
        """Self-register `caller` as a PATIENT or RESEARCHER."""

        caller = normalize_address(caller)
        self._require_text(
            given_name=given_name,
            family_name=family_name,
            nationality=nationality,
            contact_email=contact_email,
        )
        with self._lock:
            self._require_unregistered_locked(caller)
            try:
                requested = Role.from_any(role)
            except ValueError as e:
                raise InvalidRoleRequested(str(e)) from e
            if not is_self_assignable_user_role(requested):
                raise InvalidRoleRequested(f"Role {requested.value} cannot be self-assigned")

            profile = UserProfile(
                given_name=given_name,
                family_name=family_name,
                nationality=nationality,
                contact_email=contact_email,
                registered=True,
            )
            self._roles[caller] = requested
            self._users[caller] = profile
            self.events.entity_registered(caller, requested, profile.display_name)

        _LOGGER.info("registered %s as %s", caller, requested.value)
        return profile

    def register_hospital(self, caller: str, name: str, official_id: str, physical_address: str) -> HospitalProfile:
        """Self-register `caller` as an unverified HOSPITAL."""

        caller = normalize_address(caller)
        self._require_text(name=name, official_id=official_id, physical_address=physical_address)
        with self._lock:
            self._require_unregistered_locked(caller)

            profile = HospitalProfile(
                name=name,
                official_id=official_id,
                physical_address=physical_address,
                registered=True,
                verified=False,
            )
            self._roles[caller] = Role.HOSPITAL
            self._hospitals[caller] = profile
            self.events.entity_registered(caller, Role.HOSPITAL, profile.name)

        _LOGGER.info("registered %s as hospital", caller)
        return profile

    def verify_hospital(self, caller: str, target: str, verified: bool) -> HospitalProfile:
        """Set or clear a hospital's verified flag. Owner only.

        Setting the flag to its current value is allowed and still emits a
        HospitalVerified event.
        """

        caller = normalize_address(caller)
        target = normalize_address(target)
        if not isinstance(verified, bool):
            raise TypeError(f"verified must be a bool, got {type(verified).__name__}")
        with self._lock:
            if caller != self._owner:
                raise Unauthorized(f"Only the owner can verify hospitals, not {caller}")
            role = self._role_locked(target)
            if profile_kind(role) != "hospital":
                raise NotAHospital(f"Address {target} has role {role.value}, not hospital")

            updated = replace(self._hospitals[target], verified=verified)
            self._hospitals[target] = updated
            self.events.hospital_verified(target, updated.verified)

        _LOGGER.info("hospital %s verified=%s", target, updated.verified)
        return updated

    def get_role(self, address: str) -> Role:
        address = normalize_address(address)
        with self._lock:
            return self._role_locked(address)

    def get_user_details(self, address: str) -> UserProfile:
        address = normalize_address(address)
        with self._lock:
            profile = self._users.get(address)
        if profile is None or not profile.registered:
            raise NotFound(f"No user profile for {address}")
        return profile

    def get_hospital_details(self, address: str) -> HospitalProfile:
        address = normalize_address(address)
        with self._lock:
            profile = self._hospitals.get(address)
        if profile is None or not profile.registered:
            raise NotFound(f"No hospital profile for {address}")
        return profile
