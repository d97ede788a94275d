from __future__ import annotations

import pytest

from medregistry.core.roles import Role, is_self_assignable_user_role, profile_kind


def test_from_any_accepts_names_codes_and_labels() -> None:
    assert Role.from_any(Role.HOSPITAL) is Role.HOSPITAL
    assert Role.from_any("Patient") is Role.PATIENT
    assert Role.from_any(" researcher ") is Role.RESEARCHER
    assert Role.from_any("paciente") is Role.PATIENT
    assert Role.from_any("Investigador") is Role.RESEARCHER
    assert Role.from_any(3) is Role.HOSPITAL
    assert Role.from_any("4") is Role.ADMIN


@pytest.mark.parametrize("bad", ["doctor", 7, -1, True, ""])
def test_from_any_rejects_unknown_values(bad: object) -> None:
    with pytest.raises(ValueError):
        Role.from_any(bad)


def test_codes_are_stable() -> None:
    assert [r.code for r in Role] == [0, 1, 2, 3, 4]


def test_every_role_has_a_profile_kind() -> None:
    kinds = {role: profile_kind(role) for role in Role}

    assert kinds == {
        Role.NONE: "none",
        Role.PATIENT: "user",
        Role.RESEARCHER: "user",
        Role.HOSPITAL: "hospital",
        Role.ADMIN: "none",
    }


def test_only_patient_and_researcher_are_self_assignable() -> None:
    assert {r for r in Role if is_self_assignable_user_role(r)} == {Role.PATIENT, Role.RESEARCHER}
