"""Annotator exception taxonomy.

Every domain exception inherits from ``AnnotatorError`` and carries
structured context fields so that the interaction boundary can turn any
failure into a user-visible status message without losing detail.

Taxonomy
--------
- ``ValidationError``     : commit attempted with bad input (too few
  vertices, empty label, malformed ring).
- ``DuplicateKeyError``   : label already present in the collection.
- ``NotFoundError``       : lookup of an unknown label or option name.
- ``SerializationError``  : GeoJSON export/import failure.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class AnnotatorError(Exception):
    """Base exception for all annotator-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Component where the error occurred
            (e.g. ``"commit"``, ``"serialize"``).
        code: Machine-readable error code (e.g. ``"DUPLICATE_LABEL"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, DuplicateKeyError):
            return "duplicate"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, NotFoundError):
            return "not_found"
        if isinstance(self, SerializationError):
            return "serialization"
        return "internal"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category classes
# ---------------------------------------------------------------------------


class ValidationError(AnnotatorError):
    """Input or domain-model validation failure."""

    default_stage = "commit"
    default_code = "VALIDATION_FAILED"


class DuplicateKeyError(AnnotatorError):
    """A label is already used by a feature in the collection.

    Attributes:
        label: The conflicting label.
    """

    default_stage = "commit"
    default_code = "DUPLICATE_LABEL"

    def __init__(self, label: str, message: str = "", **kwargs: str) -> None:
        self.label = label
        super().__init__(message or f"Label {label!r} already exists", **kwargs)


class NotFoundError(AnnotatorError):
    """A requested key is not present.

    Attributes:
        key: The key that was looked up.
    """

    default_stage = "query"
    default_code = "NOT_FOUND"

    def __init__(self, key: str, message: str = "", **kwargs: str) -> None:
        self.key = key
        super().__init__(message or f"No entry named {key!r}", **kwargs)


class SerializationError(AnnotatorError):
    """GeoJSON encoding or decoding failure."""

    default_stage = "serialize"
    default_code = "SERIALIZATION_FAILED"
