from __future__ import annotations


class VcpError(Exception):
    """Base class for errors raised while building a movements report."""


class MissingSourceError(VcpError):
    def __init__(self, month_id: str, source: str) -> None:
        super().__init__(f"No movements table for month {month_id} ({source})")
        self.month_id = month_id
        self.source = source
