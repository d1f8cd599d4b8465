#!/usr/bin/env python3
"""
Seven-segment digit preview widget.

Custom QPainter widget that draws a generated digit, scaled to fit and
centred, with lit segments in the current color and unlit ones dimmed.
The widget owns a SevenSegController over its part set, so callers drive
it with the same set_digit / set_segments / on / off calls.
"""

from typing import List, Optional

try:
    from PyQt6.QtCore import QPointF, QTimer, Qt
    from PyQt6.QtGui import QBrush, QColor, QPainter, QPolygonF
    from PyQt6.QtWidgets import QWidget
    PYQT6_AVAILABLE = True
except ImportError:
    PYQT6_AVAILABLE = False

from ..animation import Frame, apply_frame
from ..controller import SevenSegController
from ..core.models import DEFAULT_SHAPE_PARAMS, SegmentShapeParams
from ..geometry import generate


if PYQT6_AVAILABLE:

    class UCSevenSegment(QWidget):
        """Single-digit seven-segment preview.

        Args:
            params: Digit geometry (defaults to the reference digit).
            parent: Parent widget.
        """

        def __init__(self, params: Optional[SegmentShapeParams] = None, parent=None):
            super().__init__(parent)
            self.setMinimumSize(60, 90)

            self._color = QColor(255, 42, 0)     # Lit segment color
            self._dim_color = QColor(42, 10, 5)  # Off-segment color
            self._background = QColor(15, 12, 10)

            self._frames: List[Frame] = []
            self._frame_index = 0
            self._timer = QTimer(self)
            self._timer.setSingleShot(True)
            self._timer.timeout.connect(self._next_frame)

            self.set_params(params or DEFAULT_SHAPE_PARAMS)

        # --- Digit state ------------------------------------------------

        @property
        def digit(self):
            return self._digit

        @property
        def controller(self) -> SevenSegController:
            return self._controller

        def set_params(self, params: SegmentShapeParams) -> None:
            """Regenerate geometry; all segments start off."""
            self._digit = generate(params)
            self._controller = SevenSegController(self._digit.parts)
            self._controller.off()
            self.update()

        def set_digit(self, digit: int) -> None:
            self._controller.set_digit(digit)
            self.update()

        def set_segments(self, encoded: int) -> None:
            self._controller.set_segments(encoded)
            self.update()

        def on(self) -> None:
            self._controller.on()
            self.update()

        def off(self) -> None:
            self._controller.off()
            self.update()

        def set_color(self, r: int, g: int, b: int) -> None:
            """Set lit color; unlit segments get a dim version of it."""
            self._color = QColor(r, g, b)
            self._dim_color = QColor(
                max(15, r // 6),
                max(15, g // 6),
                max(15, b // 6),
            )
            self.update()

        # --- Animation --------------------------------------------------

        def play(self, frames: List[Frame]) -> None:
            """Step through ``frames``, holding each for its delay."""
            self._timer.stop()
            self._frames = list(frames)
            self._frame_index = 0
            self._next_frame()

        def stop(self) -> None:
            self._timer.stop()
            self._frames = []

        def is_playing(self) -> bool:
            return self._timer.isActive()

        def _next_frame(self) -> None:
            if self._frame_index >= len(self._frames):
                return
            frame = self._frames[self._frame_index]
            self._frame_index += 1
            apply_frame(self._controller, frame)
            self.update()
            self._timer.start(frame.delay)

        # --- Painting ---------------------------------------------------

        def _scale_and_origin(self):
            bounds = self._digit.bounds
            margin = 8
            avail_w = max(1, self.width() - 2 * margin)
            avail_h = max(1, self.height() - 2 * margin)
            if bounds.width <= 0 or bounds.height <= 0:
                return 1.0, margin, margin
            scale = min(avail_w / bounds.width, avail_h / bounds.height)
            ox = (self.width() - bounds.width * scale) / 2
            oy = (self.height() - bounds.height * scale) / 2
            return scale, ox, oy

        def paintEvent(self, event):
            painter = QPainter(self)
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), self._background)
            painter.setPen(Qt.PenStyle.NoPen)

            scale, ox, oy = self._scale_and_origin()
            on_class = self._controller.on_class
            transform = self._digit.transform

            for part in self._digit.bars:
                color = self._color if part.has_class(on_class) else self._dim_color
                painter.setBrush(QBrush(color))
                poly = QPolygonF([
                    QPointF(ox + x * scale, oy + y * scale)
                    for x, y in (transform.apply(px, py) for px, py in part.points)
                ])
                painter.drawPolygon(poly)

            dp = self._digit.decimal_point
            if dp is not None:
                color = self._color if dp.has_class(on_class) else self._dim_color
                painter.setBrush(QBrush(color))
                painter.drawEllipse(
                    QPointF(ox + dp.cx * scale, oy + dp.cy * scale),
                    dp.r * scale, dp.r * scale,
                )

            painter.end()
