from __future__ import annotations

from typing import Any

from ..core.events import EntityRegistered, Event, HospitalVerified
from ..core.profiles import HospitalProfile, UserProfile
from ..core.roles import Role


def role_to_dict(address: str, role: Role) -> dict[str, Any]:
    return {"address": address, "role": role.value, "roleCode": int(role.code)}


def user_to_dict(profile: UserProfile) -> dict[str, Any]:
    return {
        "givenName": profile.given_name,
        "familyName": profile.family_name,
        "nationality": profile.nationality,
        "contactEmail": profile.contact_email,
        "registered": bool(profile.registered),
    }


def hospital_to_dict(profile: HospitalProfile) -> dict[str, Any]:
    return {
        "name": profile.name,
        "officialId": profile.official_id,
        "physicalAddress": profile.physical_address,
        "registered": bool(profile.registered),
        "verified": bool(profile.verified),
    }


def event_to_dict(event: Event) -> dict[str, Any]:
    out: dict[str, Any] = {
        "seq": int(event.seq),
        "type": event.type,
        "address": event.address,
        "createdAt": float(event.created_at),
    }
    if isinstance(event, EntityRegistered):
        out["role"] = event.role.value
        out["displayName"] = event.display_name
    elif isinstance(event, HospitalVerified):
        out["verified"] = bool(event.verified)
    else:
        raise TypeError(f"Unsupported event: {event!r}")
    return out


def require_str(body: dict, key: str) -> str:
    """Return a string body field or raise ValueError naming it."""

    if key not in body:
        raise ValueError(f"Missing field: {key}")
    value = body[key]
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def require_bool(body: dict, key: str) -> bool:
    if key not in body:
        raise ValueError(f"Missing field: {key}")
    value = body[key]
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be a boolean")
    return value
