"""Domain service turning requested lifetimes into effective ones."""

from __future__ import annotations

import re
from datetime import datetime, timedelta

_DAYS_PATTERN = re.compile(r"[+-]?[0-9]+")


class LifetimePolicy:
    """Resolve the lifetime (in whole days) applied to an upload.

    A lifetime of 0 means the object never expires. When the server has a
    maximum lifetime, infinite or longer requests are brought down to it.
    """

    def __init__(self, default_days: int, max_days: int = 0) -> None:
        self.default_days = max(default_days, 0)
        self.max_days = max(max_days, 0)

    def clamp(self, days: int) -> int:
        """Apply the server maximum to an already parsed lifetime."""
        if self.max_days > 0 and (days <= 0 or days > self.max_days):
            return self.max_days
        return max(days, 0)

    def resolve(self, raw: str | None) -> int:
        """Parse a form value and return the effective lifetime.

        Missing, negative and non-integer values fall back to the server
        default before the maximum is applied. Only an optional sign followed
        by ASCII digits counts as an integer.
        """
        if raw is None or not _DAYS_PATTERN.fullmatch(raw):
            days = self.default_days
        else:
            days = int(raw)
        if days < 0:
            days = self.default_days
        return self.clamp(days)

    @staticmethod
    def expires_at(now: datetime, days: int) -> datetime | None:
        """Return the expiration instant for a lifetime, None for infinite."""
        if days <= 0:
            return None
        return now + timedelta(days=days)
