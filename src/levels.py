"""Severity levels — ordered so comparison drives filtering."""

from enum import IntEnum


class Severity(IntEnum):
    INFO = 0
    WARNING = 1
    ERROR = 2

    @property
    def tag(self) -> str:
        """Bracketed form as it appears in a written line, e.g. ``[WARNING]``."""
        return f"[{self.name}]"

    @classmethod
    def parse(cls, name: str) -> "Severity":
        """Look up a level by name (case-insensitive). Raises ValueError if unknown."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(m.name for m in cls)
            raise ValueError(f"Unknown log level {name!r} (expected one of: {valid})") from None
