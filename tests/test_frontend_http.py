from __future__ import annotations


def _skip(msg: str) -> None:  # pragma: no cover
    # Local import to avoid requiring pytest in environments where only runtime deps are installed.
    try:
        import pytest  # type: ignore

        pytest.skip(msg)
    except Exception:
        raise RuntimeError(msg)


def test_root_redirects_to_login_page() -> None:
    """The root URL should send browsers to the packaged login page."""

    from medregistry.core.config import Settings
    from medregistry.runtime.app import create_app

    try:
        from fastapi.testclient import TestClient
    except Exception as e:  # pragma: no cover
        _skip(f"TestClient not available ({e!r}); install test extras to run this test")
        return

    client = TestClient(create_app(settings=Settings()))

    res = client.get("/", follow_redirects=False)
    assert res.status_code in (302, 307)
    assert res.headers["location"] == "/InicioSesion"

    page = client.get("/InicioSesion")
    assert page.status_code == 200
    assert "text/html" in page.headers.get("content-type", "")
    assert "<form" in page.text.lower()

    static = client.get("/static/InicioSesion.html")
    assert static.status_code == 200
