from __future__ import annotations

import pytest

from artccsync.domain.airspace import FacilityAirspace

AIRSPACE = FacilityAirspace.from_codes(("DEN", "COS"), ("DEL", "GND", "TWR", "APP", "CTR"))


@pytest.mark.parametrize(
    ("callsign", "expected"),
    [
        ("DEN_TWR", True),
        ("DEN_1_CTR", True),
        ("cos_app", True),
        ("DEN_OBS", False),
        ("ABQ_TWR", False),
        ("DEN", False),
        ("", False),
    ],
)
def test_facility_airspace_membership(callsign: str, expected: bool) -> None:  # noqa: FBT001
    assert AIRSPACE.contains(callsign) is expected
