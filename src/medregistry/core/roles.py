from __future__ import annotations

from enum import Enum
from typing import Any, Literal


class Role(str, Enum):
    """Access class assigned to an address.

    Notes:
    - Every address has exactly one role; unknown addresses are NONE.
    - ADMIN is only ever assigned to the owner when the registry is created.
    - `code` is the stable numeric tag used by older clients.
    """

    NONE = "none"
    PATIENT = "patient"
    RESEARCHER = "researcher"
    HOSPITAL = "hospital"
    ADMIN = "admin"

    @property
    def code(self) -> int:
        return _CODES[self]

    @classmethod
    def from_any(cls, value: Any) -> "Role":
        if isinstance(value, cls):
            return value

        if isinstance(value, int) and not isinstance(value, bool):
            for role, code in _CODES.items():
                if code == value:
                    return role
            raise ValueError(f"Unknown role code: {value}")

        v = str(value).strip().lower()
        aliases: dict[str, Role] = {
            # canonical
            "none": cls.NONE,
            "patient": cls.PATIENT,
            "researcher": cls.RESEARCHER,
            "hospital": cls.HOSPITAL,
            "admin": cls.ADMIN,
            # labels used by the login page
            "ninguno": cls.NONE,
            "paciente": cls.PATIENT,
            "investigador": cls.RESEARCHER,
            "administrador": cls.ADMIN,
            # numeric strings
            "0": cls.NONE,
            "1": cls.PATIENT,
            "2": cls.RESEARCHER,
            "3": cls.HOSPITAL,
            "4": cls.ADMIN,
        }
        if v in aliases:
            return aliases[v]

        raise ValueError(f"Unknown role: {value!r}")


_CODES: dict[Role, int] = {
    Role.NONE: 0,
    Role.PATIENT: 1,
    Role.RESEARCHER: 2,
    Role.HOSPITAL: 3,
    Role.ADMIN: 4,
}


ProfileKind = Literal["none", "user", "hospital"]


def profile_kind(role: Role) -> ProfileKind:
    """Return which profile table an address with `role` lives in.

    Every role is listed explicitly so adding a member fails loudly here.
    """

    if role is Role.NONE:
        return "none"
    if role is Role.PATIENT or role is Role.RESEARCHER:
        return "user"
    if role is Role.HOSPITAL:
        return "hospital"
    if role is Role.ADMIN:
        return "none"
    raise ValueError(f"Unhandled role: {role!r}")


def is_self_assignable_user_role(role: Role) -> bool:
    if role is Role.PATIENT or role is Role.RESEARCHER:
        return True
    if role is Role.NONE or role is Role.HOSPITAL or role is Role.ADMIN:
        return False
    raise ValueError(f"Unhandled role: {role!r}")
