"""Pointer-event handling: polygon capture and the annotation session."""

from raster_annotator.interaction.click_capture import (
    CaptureState,
    ClickCaptureStateMachine,
    Status,
    StatusLevel,
)
from raster_annotator.interaction.session import AnnotationSession, CommitResult

__all__ = [
    "AnnotationSession",
    "CaptureState",
    "ClickCaptureStateMachine",
    "CommitResult",
    "Status",
    "StatusLevel",
]
