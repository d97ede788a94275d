from __future__ import annotations


def test_package_paths_work() -> None:
    from medregistry.api import create_api_app
    from medregistry.core import EventLog, InMemoryRegistry, Role
    from medregistry.core.config import Settings
    from medregistry.runtime import RegistryServer, create_app, run
    from medregistry.runtime.web import mount_frontend
    from medregistry.sdk import RegistryClient

    assert create_api_app is not None
    assert EventLog is not None
    assert InMemoryRegistry is not None
    assert Role is not None
    assert Settings is not None
    assert RegistryServer is not None
    assert create_app is not None
    assert run is not None
    assert mount_frontend is not None
    assert RegistryClient is not None


def test_top_level_exports() -> None:
    import medregistry

    for name in medregistry.__all__:
        assert getattr(medregistry, name) is not None
