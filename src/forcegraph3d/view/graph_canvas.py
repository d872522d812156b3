"""
Graph Canvas Widget (QPainter renderer)
=======================================
A QWidget that serves as the drawing surface of a GraphVisualizer.

Why is this file needed?
------------------------
1. Rendering: Every tick it paints the Frame built by controller.frame
   (edges with label boxes, nodes with labels, optional guide axes).
2. Input: Mouse, wheel and resize events are translated into the
   visualizer's pointer API.
3. Signals: Engine notifications are re-emitted as Qt signals so other
   widgets can connect to them.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional, Union

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import (
    QBrush, QColor, QFont, QFontMetricsF, QMouseEvent, QPainter, QPen, QResizeEvent, QWheelEvent
)
from PySide6.QtWidgets import QWidget

from forcegraph3d.config import VisualizerOptions
from forcegraph3d.controller.engine import FRAME_READY, GraphVisualizer, TickHandle
from forcegraph3d.controller.frame import Frame, build_frame
from forcegraph3d.controller.interaction import CURSOR_CHANGED, PointerButton
from forcegraph3d.controller.surfaces import register_surface, unregister_surface
from forcegraph3d.view.scheduler import QtTimerScheduler

logger = logging.getLogger(__name__)

_FONT_RE = re.compile(r"^\s*(?P<size>\d+(?:\.\d+)?)px\s+(?P<family>.+?)\s*$")

TEXT_COLOR = "#2c3e50"
LABEL_BACKGROUND = QColor(255, 255, 255, 178)
LABEL_PADDING = 2.0
LABEL_BOX_HEIGHT = 14.0
LINE_WIDTH = 1.5
AXIS_WIDTH = 2.0

_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.PRIMARY,
    Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
    Qt.MouseButton.RightButton: PointerButton.SECONDARY,
}

_CURSORS = {
    "grab": Qt.CursorShape.OpenHandCursor,
    "grabbing": Qt.CursorShape.ClosedHandCursor,
}


def qfont_from_css(css: str) -> QFont:
    """Convert a CSS-like font string ('12px sans-serif') into a QFont."""
    match = _FONT_RE.match(css)
    if not match:
        logger.warning(f"Unsupported font '{css}', using the default font.")
        return QFont()
    font = QFont(match.group("family"))
    font.setPixelSize(max(1, round(float(match.group("size")))))
    return font


class GraphCanvas(QWidget):
    node_selected = Signal(object)
    canvas_clicked = Signal(float, float)

    def __init__(
        self,
        surface_id: str = "graph-canvas",
        options: Union[VisualizerOptions, Mapping[str, Any], None] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName(surface_id)
        self.setMouseTracking(False)
        self.setMinimumSize(200, 200)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.PreventContextMenu)

        register_surface(surface_id, self, replace=True)
        self.visualizer = GraphVisualizer(surface_id, options)

        self._font = qfont_from_css(self.visualizer.options.font)

        self.visualizer.on(FRAME_READY, lambda _: self.update())
        self.visualizer.on(CURSOR_CHANGED, self._set_cursor_shape)
        self.visualizer.on_node_select(self.node_selected.emit)
        self.visualizer.on_canvas_click(lambda pos: self.canvas_clicked.emit(float(pos["x"]), float(pos["y"])))

        self.destroyed.connect(lambda *_: unregister_surface(surface_id))

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def start(self, interval_ms: Optional[int] = None) -> TickHandle:
        """Start the simulation loop on a QTimer owned by this widget."""
        scheduler = QtTimerScheduler(self) if interval_ms is None else QtTimerScheduler(self, interval_ms)
        return self.visualizer.start(scheduler)

    def stop(self) -> None:
        self.visualizer.stop()

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self.visualizer.resize(event.size().width(), event.size().height())
        self.update()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        button = _BUTTONS.get(event.button())
        if button is None:
            super().mousePressEvent(event)
            return
        self.visualizer.pointer_down(pos.x(), pos.y(), button)
        event.accept()
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        self.visualizer.pointer_move(pos.x(), pos.y())
        event.accept()
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        self.visualizer.pointer_up()
        event.accept()
        self.update()

    def leaveEvent(self, event) -> None:
        self.visualizer.pointer_leave()
        super().leaveEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        # Qt reports positive angleDelta when the wheel moves away from the user,
        # the DOM reports negative deltaY for the same gesture
        delta = event.angleDelta().y()
        if delta:
            self.visualizer.wheel(-delta)
            self.update()
        event.accept()

    def closeEvent(self, event) -> None:
        self.stop()
        super().closeEvent(event)

    # ------------------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------------------

    def paintEvent(self, event) -> None:
        frame = build_frame(self.visualizer)
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), QColor("white"))
            painter.setFont(self._font)
            self._paint_edges(painter, frame)
            self._paint_nodes(painter, frame)
            self._paint_axes(painter, frame)
        finally:
            painter.end()

    def _paint_edges(self, painter: QPainter, frame: Frame) -> None:
        metrics = QFontMetricsF(self._font)
        for edge in frame.edges:
            painter.setPen(QPen(QColor(edge.color), LINE_WIDTH))
            painter.drawLine(QPointF(edge.x1, edge.y1), QPointF(edge.x2, edge.y2))

            if not edge.label:
                continue
            text_width = metrics.horizontalAdvance(edge.label)
            box = QRectF(
                edge.label_x - text_width / 2 - LABEL_PADDING,
                edge.label_y - LABEL_BOX_HEIGHT / 2 - LABEL_PADDING,
                text_width + LABEL_PADDING * 2,
                LABEL_BOX_HEIGHT + LABEL_PADDING * 2,
            )
            painter.fillRect(box, LABEL_BACKGROUND)
            painter.setPen(QColor(TEXT_COLOR))
            painter.drawText(box, Qt.AlignmentFlag.AlignCenter, edge.label)

    def _paint_nodes(self, painter: QPainter, frame: Frame) -> None:
        metrics = QFontMetricsF(self._font)
        outline = QPen(QColor(TEXT_COLOR), LINE_WIDTH)
        for node in frame.nodes:
            painter.setPen(outline)
            painter.setBrush(QBrush(QColor(node.color)))
            painter.drawEllipse(QPointF(node.x, node.y), node.radius, node.radius)

            text_width = metrics.horizontalAdvance(node.label)
            painter.setPen(QColor(TEXT_COLOR))
            painter.drawText(
                QRectF(node.label_x - text_width / 2 - 1, node.label_y - metrics.height() / 2,
                       text_width + 2, metrics.height()),
                Qt.AlignmentFlag.AlignCenter,
                node.label,
            )
        painter.setBrush(Qt.BrushStyle.NoBrush)

    def _paint_axes(self, painter: QPainter, frame: Frame) -> None:
        for axis in frame.axes:
            color = QColor(axis.color)
            painter.setPen(QPen(color, AXIS_WIDTH))
            painter.drawLine(QPointF(axis.x1, axis.y1), QPointF(axis.x2, axis.y2))
            painter.drawText(QRectF(axis.x2 - 10, axis.y2 - 10, 20, 20), Qt.AlignmentFlag.AlignCenter, axis.label)

    def _set_cursor_shape(self, name: str) -> None:
        shape = _CURSORS.get(name)
        if shape is not None:
            self.setCursor(shape)
