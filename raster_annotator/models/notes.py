"""Free-text notes attached to a polygon feature.

Notes are an opaque markdown payload. The annotator never interprets the
markdown structure; it only needs a display form for export.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Notes:
    """Markdown notes for a single feature.

    Attributes:
        text: Markdown source as typed by the user.
    """

    text: str = ""

    def render_to_plain_text(self) -> str:
        """Return the display text written to GeoJSON ``properties.notes``."""
        return self.text.strip()

    def __bool__(self) -> bool:
        return bool(self.text.strip())

    @classmethod
    def coerce(cls, value: Notes | str | None) -> Notes:
        """Accept ``Notes``, raw text, or ``None`` (empty notes)."""
        if value is None:
            return cls()
        if isinstance(value, Notes):
            return value
        if isinstance(value, str):
            return cls(value)
        msg = f"notes must be Notes or str, got {type(value).__name__}"
        raise TypeError(msg)
