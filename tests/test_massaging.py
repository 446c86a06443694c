from __future__ import annotations

import pytest

from time_ms_conversions.parse.massaging import TzMassaging


def test_from_name_accepts_values_and_member_names() -> None:
    assert TzMassaging.from_name("has_tz") is TzMassaging.HAS_TZ
    assert TzMassaging.from_name("COND_ADD_TZ_UTC") is TzMassaging.COND_ADD_TZ_UTC
    assert TzMassaging.from_name(" local-tz ") is TzMassaging.LOCAL_TZ
    assert TzMassaging.from_name(TzMassaging.HAS_TZ) is TzMassaging.HAS_TZ


def test_from_name_rejects_unknown_policy() -> None:
    with pytest.raises(ValueError, match="expected one of: cond_add_tz_utc, has_tz, local_tz"):
        TzMassaging.from_name("utc")
