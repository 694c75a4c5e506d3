from __future__ import annotations

import pytest

from artccsync.domain.errors import RecordFormatError
from artccsync.domain.model import Role
from artccsync.domain.roles import merge_roles, parse_role, parse_roles, synced_roles
from tests.helpers.facility import FACILITY, make_member


def test_only_local_staff_roles_are_synced() -> None:
    member = make_member(
        1,
        roles=[
            (FACILITY, "ATM"),
            (FACILITY, "FE"),
            ("ZAB", "DATM"),
            (FACILITY, "MTR"),
            (FACILITY, "USWT"),
        ],
    )

    assert synced_roles(member, FACILITY) == {Role.ATM, Role.MTR}


def test_home_instructors_get_ins() -> None:
    home = make_member(1, rating=8)
    visitor = make_member(2, rating=8, facility="ZAB")
    student = make_member(3, rating=5)

    assert synced_roles(home, FACILITY) == {Role.INS}
    assert synced_roles(visitor, FACILITY) == frozenset()
    assert synced_roles(student, FACILITY) == frozenset()


def test_merge_never_removes_roles() -> None:
    existing = frozenset({Role.FE, Role.ATM})

    merged = merge_roles(existing, frozenset({Role.MTR}))

    assert merged == {Role.FE, Role.ATM, Role.MTR}
    assert merge_roles(existing, frozenset()) == existing


def test_parse_role_rejects_unknown_codes() -> None:
    assert parse_role(" datm ") is Role.DATM
    assert parse_roles(["ATM", "WM"]) == {Role.ATM, Role.WM}
    with pytest.raises(RecordFormatError):
        parse_role("ATM,WM")
