from __future__ import annotations

import pytest

from medregistry.core import EntityRegistered, EventLog, HospitalVerified, InMemoryRegistry, RegistryError, Role

OWNER = "0x" + "0a" * 20
USER = "0x" + "1b" * 20
HOSPITAL = "0x" + "2c" * 20


def test_bootstrap_emits_admin_registration() -> None:
    reg = InMemoryRegistry(owner=OWNER)

    events = reg.events.since(0)
    assert len(events) == 1
    ev = events[0]
    assert isinstance(ev, EntityRegistered)
    assert ev.seq == 1
    assert ev.address == OWNER
    assert ev.role is Role.ADMIN
    assert ev.display_name == "Administrator"


def test_registrations_and_verifications_are_logged_in_order() -> None:
    reg = InMemoryRegistry(owner=OWNER)

    reg.register_user(USER, "Ana", "Gomez", "CL", "ana@x.com", Role.PATIENT)
    reg.register_hospital(HOSPITAL, "Clinica Sur", "LIC-99", "Av. Siempre Viva 123")
    reg.verify_hospital(OWNER, HOSPITAL, True)
    reg.verify_hospital(OWNER, HOSPITAL, False)

    events = reg.events.since(1)
    assert [e.seq for e in events] == [2, 3, 4, 5]

    user_ev, hosp_ev, on_ev, off_ev = events
    assert isinstance(user_ev, EntityRegistered)
    assert (user_ev.address, user_ev.role, user_ev.display_name) == (USER, Role.PATIENT, "Ana Gomez")
    assert isinstance(hosp_ev, EntityRegistered)
    assert (hosp_ev.role, hosp_ev.display_name) == (Role.HOSPITAL, "Clinica Sur")
    assert isinstance(on_ev, HospitalVerified)
    assert (on_ev.address, on_ev.verified) == (HOSPITAL, True)
    assert isinstance(off_ev, HospitalVerified)
    assert off_ev.verified is False


def test_since_filters_by_seq() -> None:
    log = EventLog()
    log.entity_registered(USER, Role.PATIENT, "a b")
    log.hospital_verified(HOSPITAL, True)
    log.hospital_verified(HOSPITAL, False)

    assert log.revision() == 3
    assert [e.seq for e in log.since(0)] == [1, 2, 3]
    assert [e.seq for e in log.since(2)] == [3]
    assert log.since(3) == []
    assert [e.seq for e in log.since(-5)] == [1, 2, 3]


def test_failed_operations_emit_nothing() -> None:
    reg = InMemoryRegistry(owner=OWNER)
    seen: list[int] = []
    reg.events.subscribe(lambda e: seen.append(e.seq))

    for call in (
        lambda: reg.register_user(USER, "A", "B", "CL", "a@x.com", Role.HOSPITAL),
        lambda: reg.verify_hospital(USER, HOSPITAL, True),
        lambda: reg.verify_hospital(OWNER, HOSPITAL, True),
    ):
        with pytest.raises(RegistryError):
            call()

    assert seen == []
    assert reg.events.revision() == 1


def test_subscribers_receive_events_and_can_unsubscribe() -> None:
    reg = InMemoryRegistry(owner=OWNER)
    received: list[str] = []

    unsubscribe = reg.events.subscribe(lambda e: received.append(e.type))
    reg.register_hospital(HOSPITAL, "Clinica Sur", "LIC-99", "Av. Siempre Viva 123")
    reg.verify_hospital(OWNER, HOSPITAL, True)
    unsubscribe()
    reg.verify_hospital(OWNER, HOSPITAL, False)

    assert received == ["EntityRegistered", "HospitalVerified"]


def test_failing_subscriber_does_not_block_others_or_undo_state() -> None:
    reg = InMemoryRegistry(owner=OWNER)
    received: list[int] = []

    def _boom(event: object) -> None:
        raise RuntimeError("observer down")

    reg.events.subscribe(_boom)
    reg.events.subscribe(lambda e: received.append(e.seq))

    reg.register_hospital(HOSPITAL, "Clinica Sur", "LIC-99", "Av. Siempre Viva 123")

    assert received == [2]
    assert reg.get_role(HOSPITAL) is Role.HOSPITAL
