from __future__ import annotations

import logging

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..core.config import Settings
from ..core.errors import (
    AlreadyRegistered,
    InvalidAddress,
    InvalidRoleRequested,
    NotAHospital,
    NotFound,
    RegistryError,
    Unauthorized,
)
from ..core.profiles import normalize_address
from ..core.registry import InMemoryRegistry
from .serializers import (
    event_to_dict,
    hospital_to_dict,
    require_bool,
    require_str,
    role_to_dict,
    user_to_dict,
)

_LOGGER = logging.getLogger(__name__)

CALLER_HEADER = "X-Caller-Address"


class MissingCaller(Unauthorized):
    """No caller identity was sent with a mutating request."""


ERROR_STATUS: dict[type[RegistryError], int] = {
    MissingCaller: 401,
    Unauthorized: 403,
    AlreadyRegistered: 409,
    InvalidRoleRequested: 400,
    NotAHospital: 409,
    NotFound: 404,
    InvalidAddress: 400,
}


def _status_for(exc: RegistryError) -> int:
    for cls, status in ERROR_STATUS.items():
        if isinstance(exc, cls):
            return status
    return 400


def _require_caller(caller: str | None) -> str:
    if caller is None or not caller.strip():
        raise MissingCaller(f"Missing {CALLER_HEADER} header")
    return caller


def create_api_app(registry: InMemoryRegistry | None = None, *, settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    if registry is None:
        registry = InMemoryRegistry(owner=settings.owner)

    app = FastAPI(title="medregistry", version="0.1.0")
    app.state.registry = registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RegistryError)
    def _registry_error(request: Request, exc: RegistryError) -> JSONResponse:
        status = _status_for(exc)
        _LOGGER.info("%s %s rejected: %s (%s)", request.method, request.url.path, exc.code, exc.detail)
        return JSONResponse(status_code=status, content={"error": exc.code, "detail": exc.detail})

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/registry")
    def describe() -> dict:
        return registry.describe()

    @app.get("/api/events")
    def events(since: int = 0) -> dict:
        # Polling endpoint for front-ends and indexers.
        items = registry.events.since(since)
        return {
            "globalRevision": registry.events.revision(),
            "events": [event_to_dict(e) for e in items],
        }

    @app.post("/api/users")
    def register_user(body: dict, x_caller_address: str | None = Header(default=None)) -> dict:
        caller = _require_caller(x_caller_address)
        try:
            given_name = require_str(body, "givenName")
            family_name = require_str(body, "familyName")
            nationality = require_str(body, "nationality")
            contact_email = require_str(body, "contactEmail")
            if "role" not in body:
                raise ValueError("Missing field: role")
            role = body["role"]
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        profile = registry.register_user(caller, given_name, family_name, nationality, contact_email, role)
        return {"ok": True, **role_to_dict(normalize_address(caller), registry.get_role(caller)), "profile": user_to_dict(profile)}

    @app.post("/api/hospitals")
    def register_hospital(body: dict, x_caller_address: str | None = Header(default=None)) -> dict:
        caller = _require_caller(x_caller_address)
        try:
            name = require_str(body, "name")
            official_id = require_str(body, "officialId")
            physical_address = require_str(body, "physicalAddress")
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        profile = registry.register_hospital(caller, name, official_id, physical_address)
        return {"ok": True, **role_to_dict(normalize_address(caller), registry.get_role(caller)), "profile": hospital_to_dict(profile)}

    @app.put("/api/hospitals/{address}/verification")
    def verify_hospital(address: str, body: dict, x_caller_address: str | None = Header(default=None)) -> dict:
        caller = _require_caller(x_caller_address)
        try:
            verified = require_bool(body, "verified")
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        profile = registry.verify_hospital(caller, address, verified)
        return {"ok": True, "address": normalize_address(address), "profile": hospital_to_dict(profile)}

    @app.get("/api/roles/{address}")
    def get_role(address: str) -> dict:
        role = registry.get_role(address)
        return role_to_dict(normalize_address(address), role)

    @app.get("/api/users/{address}")
    def get_user_details(address: str) -> dict:
        return user_to_dict(registry.get_user_details(address))

    @app.get("/api/hospitals/{address}")
    def get_hospital_details(address: str) -> dict:
        return hospital_to_dict(registry.get_hospital_details(address))

    return app
