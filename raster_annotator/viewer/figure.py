"""Matplotlib widget surface for interactive polygon annotation.

Builds one figure with a control column on the left and the raster
heatmap on the right, then forwards canvas events to an
``AnnotationSession``:

- mouse motion over the heatmap → ``on_hover``
- left click on the heatmap → ``on_left_click`` (ignored while the
  toolbar is in pan/zoom mode)
- Clear / Save buttons → ``request_clear`` / ``request_commit``

Observable state from the session (pointer, in-progress vertices, status,
saved polygons) is rendered back onto the figure: a pointer readout in
the top-left corner of the raster, the in-progress polyline with a dashed
closing edge, and a translucent overlay of the selected saved polygon.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.backend_bases import MouseButton
from matplotlib.patches import Polygon as PolygonPatch
from matplotlib.widgets import Button, RadioButtons, TextBox

from raster_annotator.core.config import AnnotatorConfig
from raster_annotator.core.constants import COLORMAPS, DRAW_COLORS, NO_SELECTION
from raster_annotator.core.exceptions import AnnotatorError, DuplicateKeyError, ValidationError
from raster_annotator.interaction.click_capture import Status, StatusLevel
from raster_annotator.interaction.session import AnnotationSession
from raster_annotator.providers.factory import open_raster
from raster_annotator.utils.remap import get_remap, list_remaps

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from matplotlib.backend_bases import MouseEvent
    from matplotlib.text import Text

    from raster_annotator.models.feature import PolygonFeature
    from raster_annotator.models.geometry import Point
    from raster_annotator.providers.base import RasterProvider

logger = logging.getLogger("raster_annotator.viewer.figure")

_STATUS_COLORS = {
    StatusLevel.NONE: "black",
    StatusLevel.SUCCESS: "green",
    StatusLevel.ERROR: "red",
}

_DPI = 100


class _Column:
    """Stack control axes top-down inside the left column of a figure."""

    def __init__(self, figure: plt.Figure, width: float, top: float = 0.98) -> None:
        self._figure = figure
        self._x = 0.02
        self._width = width
        self._top = top

    def heading(self, text: str) -> None:
        self._top -= 0.03
        self._figure.text(self._x, self._top, text, fontsize=13, fontweight="bold", ha="left")
        self._top -= 0.008

    def axes(self, height: float) -> plt.Axes:
        self._top -= height
        ax = self._figure.add_axes((self._x, self._top, self._width, height))
        self._top -= 0.008
        return ax

    def text(self, height: float = 0.025) -> Text:
        self._top -= height
        return self._figure.text(self._x, self._top, "", fontsize=11, ha="left")


class AnnotatorFigure:
    """A matplotlib figure bound to an ``AnnotationSession``.

    Attributes:
        raster: Source of the heatmap.
        config: Initial control values.
        session: Annotation state; ``session.store`` holds the saved polygons.
        figure: The matplotlib figure.
        ax: The heatmap axes (raster coordinates).
    """

    def __init__(
        self,
        raster: RasterProvider,
        config: AnnotatorConfig,
        session: AnnotationSession | None = None,
    ) -> None:
        self.raster = raster
        self.config = config
        self.session = session if session is not None else AnnotationSession()

        self._max_resolution = config.max_resolution
        self._remap_name = config.remap
        self._draw_color = config.draw_color
        self._view_selection = NO_SELECTION
        self._label_text = ""
        self._notes_text = ""
        self._label_error: Status | None = None

        width_px, height_px = config.figure_size_px
        self.figure = plt.figure(figsize=(width_px / _DPI, height_px / _DPI), dpi=_DPI)
        ui_fraction = config.ui_width / width_px

        self._build_heatmap(ui_fraction)
        self._build_controls(ui_fraction)

        capture = self.session.capture
        self._unsubscribers = [
            capture.pointer.subscribe(self._on_pointer),
            capture.vertices.subscribe(self._on_vertices),
            capture.status.subscribe(self._on_status),
            self.session.store.subscribe(self._on_store),
        ]

        canvas = self.figure.canvas
        canvas.mpl_connect("motion_notify_event", self._handle_motion)
        canvas.mpl_connect("button_press_event", self._handle_press)
        canvas.mpl_connect("close_event", self._handle_close)

        self._on_pointer(capture.pointer.value)
        self._on_vertices(capture.vertices.value)
        self._on_store(self.session.store.snapshot())

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _build_heatmap(self, ui_fraction: float) -> None:
        left = ui_fraction + 0.04
        self.ax = self.figure.add_axes((left, 0.05, 0.9 - left, 0.9))
        self.ax.set_title(self.raster.name)
        colorbar_ax = self.figure.add_axes((0.92, 0.05, 0.02, 0.9))

        self._image = self.ax.imshow(
            self._display_values(),
            extent=self.raster.extent.as_imshow_extent(),
            origin="upper",
            cmap=self.config.colormap,
            interpolation="nearest",
            aspect="auto",
        )
        self.figure.colorbar(self._image, cax=colorbar_ax)

        self._pointer_text = self.ax.text(
            *self.raster.top_left,
            "",
            color=self._draw_color,
            ha="left",
            va="top",
            fontsize=16,
        )
        (self._draft_line,) = self.ax.plot(
            [], [], color=self._draw_color, linewidth=2, marker="o", markersize=8
        )
        (self._closing_line,) = self.ax.plot(
            [], [], color=self._draw_color, linewidth=2, linestyle="--"
        )
        self._preview_patch = PolygonPatch(
            np.zeros((1, 2)),
            closed=True,
            facecolor=self._draw_color,
            edgecolor=self._draw_color,
            linewidth=1,
            linestyle=":",
            alpha=0.3,
            visible=False,
        )
        self.ax.add_patch(self._preview_patch)

    def _build_controls(self, ui_fraction: float) -> None:
        column = _Column(self.figure, width=ui_fraction - 0.03)

        column.heading("Maximum Resolution")
        self.resolution_box = TextBox(column.axes(0.03), "", initial=str(self._max_resolution))
        self.resolution_box.on_submit(self._on_resolution_submit)

        remaps = list_remaps()
        column.heading("Remap Function")
        self.remap_selector = RadioButtons(
            column.axes(0.11), remaps, active=remaps.index(self._remap_name)
        )
        self.remap_selector.on_clicked(self._on_remap_selected)

        column.heading("Colormap")
        self.colormap_selector = RadioButtons(
            column.axes(0.17), COLORMAPS, active=COLORMAPS.index(self.config.colormap)
        )
        self.colormap_selector.on_clicked(self._on_colormap_selected)

        column.heading("Draw Polygon")
        self.color_selector = RadioButtons(
            column.axes(0.13), DRAW_COLORS, active=DRAW_COLORS.index(self._draw_color)
        )
        self.color_selector.on_clicked(self._on_color_selected)
        self.clear_button = Button(column.axes(0.03), "Clear")
        self.clear_button.on_clicked(self._on_clear)
        self.label_box = TextBox(column.axes(0.03), "Label ", initial="")
        self.label_box.on_text_change(self._on_label_change)
        self.notes_box = TextBox(column.axes(0.03), "Notes ", initial="")
        self.notes_box.on_text_change(self._on_notes_change)
        self.save_button = Button(column.axes(0.03), "Save")
        self.save_button.on_clicked(self._on_save)
        self._status_text = column.text()

        column.heading("View Saved Polygon")
        self.view_button = Button(column.axes(0.03), "Next")
        self.view_button.on_clicked(self._on_view_next)
        self._view_text = column.text()

    def _display_values(self) -> np.ndarray:
        grid = self.raster.display_grid(self._max_resolution)
        with np.errstate(invalid="ignore", divide="ignore"):
            return np.asarray(get_remap(self._remap_name)(grid), dtype=float)

    # ------------------------------------------------------------------
    # Canvas events → session
    # ------------------------------------------------------------------

    def _handle_motion(self, event: MouseEvent) -> None:
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            return
        self.session.on_hover(event.xdata, event.ydata)

    def _handle_press(self, event: MouseEvent) -> None:
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            return
        if event.button != MouseButton.LEFT:
            return
        toolbar = self.figure.canvas.toolbar
        if toolbar is not None and toolbar.mode:
            return
        self.session.on_left_click(event.xdata, event.ydata)

    def _handle_close(self, _event: object) -> None:
        self.disconnect()

    def disconnect(self) -> None:
        """Stop rendering session updates; the session itself stays usable."""
        while self._unsubscribers:
            self._unsubscribers.pop()()
        logger.debug("Annotator disconnected | raster=%s", self.raster.name)

    # ------------------------------------------------------------------
    # Controls → session / display
    # ------------------------------------------------------------------

    def _on_clear(self, _event: object) -> None:
        self.session.request_clear()

    def _on_label_change(self, text: str) -> None:
        self._label_text = text.strip()
        capture = self.session.capture
        if self._label_text and not capture.is_label_available(self._label_text):
            capture.report_error(
                DuplicateKeyError(
                    self._label_text, f'Polygon label "{self._label_text}" is already in use'
                )
            )
            self._label_error = capture.status.value
        elif self._label_error is not None:
            if capture.status.value == self._label_error:
                capture.status.set(Status())
            self._label_error = None

    def _on_notes_change(self, text: str) -> None:
        self._notes_text = text

    def _on_save(self, _event: object) -> None:
        self.session.request_commit(self._label_text, self._notes_text)

    def _on_resolution_submit(self, text: str) -> None:
        try:
            value = int(text)
        except ValueError:
            value = 0
        if value <= 0:
            self.session.capture.report_error(
                ValidationError(f"Maximum resolution must be a positive integer, got {text!r}")
            )
            return
        self._max_resolution = value
        self._refresh_image()

    def _on_remap_selected(self, name: str) -> None:
        self._remap_name = name
        self._refresh_image()

    def _on_colormap_selected(self, name: str) -> None:
        self._image.set_cmap(name)
        self._redraw()

    def _on_color_selected(self, color: str) -> None:
        self._draw_color = color
        for artist in (self._pointer_text, self._draft_line, self._closing_line):
            artist.set_color(color)
        self._preview_patch.set_facecolor(color)
        self._preview_patch.set_edgecolor(color)
        self._redraw()

    def _on_view_next(self, _event: object) -> None:
        options = self.session.view_options()
        position = options.index(self._view_selection) if self._view_selection in options else 0
        self.select_view(options[(position + 1) % len(options)])

    def select_view(self, selection: str) -> None:
        """Overlay the saved polygon *selection* (``"none"`` hides the overlay)."""
        try:
            coordinates = self.session.preview(selection)
        except AnnotatorError as exc:
            self.session.capture.report_error(exc)
            return
        self._view_selection = selection
        if coordinates:
            area = self.session.store.get(selection).ring.area
            self._preview_patch.set_xy(np.asarray(coordinates))
            self._preview_patch.set_visible(True)
            self._view_text.set_text(f"Showing: {selection} (area={area:.6g})")
        else:
            self._preview_patch.set_visible(False)
            self._view_text.set_text(f"Showing: {selection}")
        self._redraw()

    # ------------------------------------------------------------------
    # Session observables → display
    # ------------------------------------------------------------------

    def _on_pointer(self, point: Point) -> None:
        x, y = point
        self._pointer_text.set_text(f"(x={x:.4g}, y={y:.4g})")
        self._redraw()

    def _on_vertices(self, vertices: tuple[Point, ...]) -> None:
        xs = [p[0] for p in vertices]
        ys = [p[1] for p in vertices]
        self._draft_line.set_data(xs, ys)
        closing = self.session.capture.closing_segment()
        self._closing_line.set_data([p[0] for p in closing], [p[1] for p in closing])
        self._redraw()

    def _on_status(self, status: Status) -> None:
        self._status_text.set_text(status.text)
        self._status_text.set_color(_STATUS_COLORS[status.level])
        self._redraw()

    def _on_store(self, snapshot: Mapping[str, PolygonFeature]) -> None:
        if self._view_selection != NO_SELECTION and self._view_selection not in snapshot:
            self.select_view(NO_SELECTION)
            return
        self._view_text.set_text(f"Showing: {self._view_selection} ({len(snapshot)} saved)")
        self._redraw()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _refresh_image(self) -> None:
        try:
            values = self._display_values()
        except AnnotatorError as exc:
            self.session.capture.report_error(exc)
            return
        self._image.set_data(values)
        finite = values[np.isfinite(values)]
        if finite.size:
            self._image.set_clim(float(finite.min()), float(finite.max()))
        logger.debug(
            "Heatmap refreshed | remap=%s | max_resolution=%d | shape=%s",
            self._remap_name,
            self._max_resolution,
            values.shape,
        )
        self._redraw()

    def _redraw(self) -> None:
        self.figure.canvas.draw_idle()


def draw_features(
    raster: RasterProvider | np.ndarray | str | Path,
    config: AnnotatorConfig | None = None,
    *,
    extent: tuple[float, float, float, float] | None = None,
    session: AnnotationSession | None = None,
    show: bool = True,
) -> AnnotatorFigure:
    """Open the annotation figure for *raster*.

    Args:
        raster: A provider, a 2-D array, or a path to a raster file.
        config: Initial control values (defaults to ``AnnotatorConfig()``).
        extent: ``(x_min, x_max, y_min, y_max)`` when *raster* is an array.
        session: Existing session to continue; a new one is created otherwise.
        show: Whether to call ``plt.show()`` (blocks with most backends).

    Returns:
        The ``AnnotatorFigure``; its ``session.store`` holds the saved polygons.
    """
    provider = open_raster(raster, extent)
    annotator = AnnotatorFigure(provider, config or AnnotatorConfig(), session)
    logger.info(
        "Annotator opened | raster=%s | shape=%s | extent=%s",
        provider.name,
        provider.shape,
        provider.extent.as_imshow_extent(),
    )
    if show:
        plt.show()
    return annotator
