from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

LOGIN_PAGE = "InicioSesion.html"


def _packaged_frontend_root() -> Path:
    from importlib import resources as importlib_resources

    root = importlib_resources.files("medregistry").joinpath("_frontend")
    return Path(str(root))


def mount_frontend(app: FastAPI, frontend_root: Path | None = None) -> None:
    """Serve the static login front-end from the same FastAPI app.

    - `/static/*` serves the files under the frontend directory.
    - `/InicioSesion` serves the login page.
    - `/` redirects to the login page.
    """

    root = (frontend_root or _packaged_frontend_root()).resolve()
    login_html = root / LOGIN_PAGE
    if not login_html.exists():
        raise FileNotFoundError(f"Frontend missing. Expected {login_html}.")

    app.mount("/static", StaticFiles(directory=str(root)), name="static")

    @app.get("/InicioSesion", include_in_schema=False)
    def _login_page():
        return FileResponse(str(login_html))

    @app.get("/", include_in_schema=False)
    def _root():
        return RedirectResponse(url="/InicioSesion")
