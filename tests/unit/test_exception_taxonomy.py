"""Tests for the annotator exception taxonomy.

Validates:
- AnnotatorError structured attributes and ``to_error_dict()`` keys
- Category classification per concrete class
- Every component exception is an AnnotatorError subclass
"""

from __future__ import annotations

from raster_annotator.core.config import ConfigValidationError
from raster_annotator.core.exceptions import (
    AnnotatorError,
    DuplicateKeyError,
    NotFoundError,
    SerializationError,
    ValidationError,
)
from raster_annotator.providers.base import RasterError


class TestAnnotatorErrorBase:
    """AnnotatorError base class behavior."""

    def test_default_attributes(self) -> None:
        err = AnnotatorError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""

    def test_custom_attributes(self) -> None:
        err = AnnotatorError("fail", stage="commit", code="X")
        assert err.stage == "commit"
        assert err.code == "X"

    def test_str_is_message(self) -> None:
        assert str(AnnotatorError("human-readable error")) == "human-readable error"

    def test_to_error_dict_keys(self) -> None:
        d = AnnotatorError("x", stage="s", code="C").to_error_dict()
        assert set(d.keys()) == {"category", "code", "stage", "message"}
        assert d["category"] == "internal"


class TestCategories:
    """Each concrete class reports its own category."""

    def test_validation(self) -> None:
        err = ValidationError("too few vertices")
        assert err.category == "validation"
        assert err.stage == "commit"
        assert err.code == "VALIDATION_FAILED"

    def test_duplicate(self) -> None:
        err = DuplicateKeyError("A")
        assert err.category == "duplicate"
        assert err.label == "A"
        assert "'A'" in err.message

    def test_not_found(self) -> None:
        err = NotFoundError("missing")
        assert err.category == "not_found"
        assert err.key == "missing"
        assert err.stage == "query"

    def test_serialization(self) -> None:
        err = SerializationError("NaN")
        assert err.category == "serialization"
        assert err.to_error_dict()["code"] == "SERIALIZATION_FAILED"

    def test_code_override(self) -> None:
        err = ValidationError("empty", code="EMPTY_LABEL")
        assert err.code == "EMPTY_LABEL"


class TestHierarchy:
    """All component exceptions share the base class."""

    def test_subclasses(self) -> None:
        for cls in (
            ValidationError,
            DuplicateKeyError,
            NotFoundError,
            SerializationError,
            ConfigValidationError,
            RasterError,
        ):
            assert issubclass(cls, AnnotatorError)

    def test_config_error_stage(self) -> None:
        err = ConfigValidationError("ANNOTATOR_UI_WIDTH", -1, "must be > 0")
        assert err.stage == "config"
        assert err.key == "ANNOTATOR_UI_WIDTH"
        assert err.value == -1
        assert "ANNOTATOR_UI_WIDTH=-1" in str(err)

    def test_raster_error_stage(self) -> None:
        assert RasterError("bad file").stage == "raster"
