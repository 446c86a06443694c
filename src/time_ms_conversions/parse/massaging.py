from __future__ import annotations

import enum


class TzMassaging(enum.Enum):
    """How a date-time string's missing or ambiguous timezone is resolved."""

    COND_ADD_TZ_UTC = "cond_add_tz_utc"
    """Assume UTC when no numeric offset is present."""

    HAS_TZ = "has_tz"
    """A numeric offset is required."""

    LOCAL_TZ = "local_tz"
    """No offset; the value is wall-clock time in the local timezone."""

    @classmethod
    def from_name(cls, name: str | TzMassaging) -> TzMassaging:
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", "_")
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown tz massaging policy: {name!r} (expected one of: {valid})")
