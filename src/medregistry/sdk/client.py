from __future__ import annotations

from typing import Any

import httpx

from ..core.errors import ERRORS_BY_CODE
from ..core.events import EntityRegistered, Event, HospitalVerified
from ..core.profiles import HospitalProfile, UserProfile
from ..core.roles import Role

CALLER_HEADER = "X-Caller-Address"


def _user_from_dict(data: dict[str, Any]) -> UserProfile:
    return UserProfile(
        given_name=str(data["givenName"]),
        family_name=str(data["familyName"]),
        nationality=str(data["nationality"]),
        contact_email=str(data["contactEmail"]),
        registered=bool(data["registered"]),
    )


def _hospital_from_dict(data: dict[str, Any]) -> HospitalProfile:
    return HospitalProfile(
        name=str(data["name"]),
        official_id=str(data["officialId"]),
        physical_address=str(data["physicalAddress"]),
        registered=bool(data["registered"]),
        verified=bool(data["verified"]),
    )


def _event_from_dict(data: dict[str, Any]) -> Event:
    common = {
        "seq": int(data["seq"]),
        "address": str(data["address"]),
        "created_at": float(data["createdAt"]),
    }
    kind = data.get("type")
    if kind == "EntityRegistered":
        return EntityRegistered(**common, role=Role.from_any(data["role"]), display_name=str(data["displayName"]))
    if kind == "HospitalVerified":
        return HospitalVerified(**common, verified=bool(data["verified"]))
    raise ValueError(f"Unknown event type: {kind!r}")


def _raise_for_response(res: httpx.Response, what: str) -> None:
    if res.status_code < 400:
        return
    try:
        data = res.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        cls = ERRORS_BY_CODE.get(str(data.get("error")))
        if cls is not None:
            raise cls(str(data.get("detail") or ""))
    raise RuntimeError(f"{what} failed: {res.status_code} {res.text}")


class RegistryClient:
    """HTTP client for a running registry server.

    Mutating calls are sent on behalf of `caller` (the X-Caller-Address header).
    Rejections come back as the same `RegistryError` subclasses the registry
    raises in-process.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:3801", *, caller: str | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.caller = caller

    def as_caller(self, caller: str) -> "RegistryClient":
        return RegistryClient(self.base_url, caller=caller)

    def _headers(self) -> dict[str, str]:
        if self.caller is None:
            return {}
        return {CALLER_HEADER: self.caller}

    def _request(self, method: str, path: str, what: str, *, timeout_s: float, **kwargs: Any) -> Any:
        with httpx.Client(base_url=self.base_url, timeout=timeout_s) as client:
            res = client.request(method, path, headers=self._headers(), **kwargs)
        _raise_for_response(res, what)
        return res.json()

    def describe(self, *, timeout_s: float = 10.0) -> dict[str, Any]:
        return dict(self._request("GET", "/api/registry", "Describe registry", timeout_s=timeout_s))

    def events(self, since: int = 0, *, timeout_s: float = 10.0) -> list[Event]:
        """Return events with seq greater than `since`, oldest first."""
        data = self._request("GET", "/api/events", "List events", params={"since": int(since)}, timeout_s=timeout_s)
        return [_event_from_dict(e) for e in data.get("events") or []]

    def register_user(
        self,
        given_name: str,
        family_name: str,
        nationality: str,
        contact_email: str,
        role: Role | str = Role.PATIENT,
        *,
        timeout_s: float = 10.0,
    ) -> UserProfile:
        body = {
            "givenName": given_name,
            "familyName": family_name,
            "nationality": nationality,
            "contactEmail": contact_email,
            "role": role.value if isinstance(role, Role) else role,
        }
        data = self._request("POST", "/api/users", "Register user", json=body, timeout_s=timeout_s)
        return _user_from_dict(data["profile"])

    def register_hospital(
        self,
        name: str,
        official_id: str,
        physical_address: str,
        *,
        timeout_s: float = 10.0,
    ) -> HospitalProfile:
        body = {"name": name, "officialId": official_id, "physicalAddress": physical_address}
        data = self._request("POST", "/api/hospitals", "Register hospital", json=body, timeout_s=timeout_s)
        return _hospital_from_dict(data["profile"])

    def verify_hospital(self, target: str, verified: bool, *, timeout_s: float = 10.0) -> HospitalProfile:
        data = self._request(
            "PUT",
            f"/api/hospitals/{target}/verification",
            "Verify hospital",
            json={"verified": bool(verified)},
            timeout_s=timeout_s,
        )
        return _hospital_from_dict(data["profile"])

    def get_role(self, address: str, *, timeout_s: float = 10.0) -> Role:
        data = self._request("GET", f"/api/roles/{address}", "Get role", timeout_s=timeout_s)
        return Role.from_any(data["role"])

    def get_user_details(self, address: str, *, timeout_s: float = 10.0) -> UserProfile:
        return _user_from_dict(self._request("GET", f"/api/users/{address}", "Get user", timeout_s=timeout_s))

    def get_hospital_details(self, address: str, *, timeout_s: float = 10.0) -> HospitalProfile:
        return _hospital_from_dict(self._request("GET", f"/api/hospitals/{address}", "Get hospital", timeout_s=timeout_s))


__all__ = ["RegistryClient"]
