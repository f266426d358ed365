"""Pan/zoom transform state for the graph view.

Screen coordinates relate to graph coordinates by

    screen = translate + graph * scale

All updates are synchronous reactions to input events.
"""

from __future__ import annotations

from callscope.config import CameraConfig
from callscope.graph.models import Rect


class Camera:
    """Current pan/zoom transform, clamped to the configured zoom range."""

    def __init__(self, config: CameraConfig | None = None) -> None:
        self.config = config or CameraConfig()
        self.scale = self.clamp(self.config.scale)
        self.translate_x = self.config.translate_x
        self.translate_y = self.config.translate_y
        self._drag_last: tuple[float, float] | None = None

    def clamp(self, scale: float) -> float:
        scale = max(self.config.min_zoom, scale)
        if self.config.max_zoom is not None:
            scale = min(self.config.max_zoom, scale)
        return scale

    @property
    def dragging(self) -> bool:
        return self._drag_last is not None

    def begin_drag(self, x: float, y: float) -> None:
        self._drag_last = (x, y)

    def drag_to(self, x: float, y: float) -> None:
        """Pan by the pointer delta since the last drag event."""
        if self._drag_last is None:
            return
        last_x, last_y = self._drag_last
        self.pan(x - last_x, y - last_y)
        self._drag_last = (x, y)

    def end_drag(self) -> None:
        self._drag_last = None

    def pan(self, dx: float, dy: float) -> None:
        self.translate_x += dx
        self.translate_y += dy

    def wheel(self, delta_y: float, cursor_x: float, cursor_y: float) -> bool:
        """Zoom one wheel notch, keeping the point under the cursor fixed.

        Returns False when the scale is already at its limit.
        """
        factor = self.config.wheel_out_factor if delta_y > 0 else self.config.wheel_in_factor
        return self.zoom_to(self.scale * factor, cursor_x, cursor_y)

    def zoom_in(self, anchor: tuple[float, float] | None = None) -> bool:
        return self.zoom_to(self.scale * self.config.zoom_step, *(anchor or (None, None)))

    def zoom_out(self, anchor: tuple[float, float] | None = None) -> bool:
        return self.zoom_to(self.scale / self.config.zoom_step, *(anchor or (None, None)))

    def zoom_to(
        self,
        scale: float,
        anchor_x: float | None = None,
        anchor_y: float | None = None,
    ) -> bool:
        """Set the scale (clamped). With an anchor, that screen point stays fixed."""
        new_scale = self.clamp(scale)
        if new_scale == self.scale:
            return False
        if anchor_x is not None and anchor_y is not None:
            ratio = new_scale / self.scale
            self.translate_x = anchor_x - (anchor_x - self.translate_x) * ratio
            self.translate_y = anchor_y - (anchor_y - self.translate_y) * ratio
        self.scale = new_scale
        return True

    def reset(self) -> None:
        """Restore the configured default transform (double-click / reset)."""
        self.scale = self.clamp(self.config.scale)
        self.translate_x = self.config.translate_x
        self.translate_y = self.config.translate_y
        self._drag_last = None

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        return (self.translate_x + x * self.scale, self.translate_y + y * self.scale)

    def to_graph(self, x: float, y: float) -> tuple[float, float]:
        return ((x - self.translate_x) / self.scale, (y - self.translate_y) / self.scale)

    def screen_rect(self, rect: Rect) -> Rect:
        left, top = self.to_screen(rect.left, rect.top)
        return Rect(x=left, y=top, width=rect.width * self.scale, height=rect.height * self.scale)

    def visible_rect(self, viewport: Rect) -> Rect:
        """The part of graph space currently shown in `viewport`."""
        left, top = self.to_graph(viewport.left, viewport.top)
        return Rect(
            x=left, y=top,
            width=viewport.width / self.scale, height=viewport.height / self.scale,
        )

    def ensure_visible(self, rect: Rect, viewport: Rect) -> bool:
        """Center on `rect` if it is not fully inside `viewport`.

        The scale is left unchanged. Returns True if the camera moved.
        """
        if viewport.contains(self.screen_rect(rect)):
            return False
        center_x, center_y = rect.center
        view_x, view_y = viewport.center
        self.translate_x = view_x - center_x * self.scale
        self.translate_y = view_y - center_y * self.scale
        return True

    def transform(self) -> str:
        """CSS transform string for the renderer."""
        return f"translate({self.translate_x}px, {self.translate_y}px) scale({self.scale})"
