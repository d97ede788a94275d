from __future__ import annotations


class RegistryError(Exception):
    """Base class for rejected registry operations.

    `code` is the stable name carried over HTTP so clients can branch on it.
    """

    code = "RegistryError"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.code)
        self.detail = detail or self.code


class Unauthorized(RegistryError):
    code = "Unauthorized"


class AlreadyRegistered(RegistryError):
    code = "AlreadyRegistered"


class InvalidRoleRequested(RegistryError):
    code = "InvalidRoleRequested"


class NotAHospital(RegistryError):
    code = "NotAHospital"


class NotFound(RegistryError):
    code = "NotFound"


class InvalidAddress(RegistryError, ValueError):
    code = "InvalidAddress"


ERRORS_BY_CODE: dict[str, type[RegistryError]] = {
    cls.code: cls
    for cls in (
        Unauthorized,
        AlreadyRegistered,
        InvalidRoleRequested,
        NotAHospital,
        NotFound,
        InvalidAddress,
    )
}
