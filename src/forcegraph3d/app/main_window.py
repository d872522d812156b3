"""
Main Application Window
=======================
Hosts a single GraphCanvas with a small menu bar and a status bar.

Why is this file needed?
------------------------
1. Layout: It gives the canvas a top-level window.
2. Routing: It connects menu actions (open, clear, reset view, guide axes)
   to the visualizer and shows selections in the status bar.
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QFileDialog, QMainWindow, QMessageBox
from PySide6.QtGui import QAction

from forcegraph3d.model.graph import GraphNode
from forcegraph3d.model.io import GraphFileError, load_graph_file
from forcegraph3d.view.graph_canvas import GraphCanvas

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, canvas: Optional[GraphCanvas] = None) -> None:
        super().__init__()
        self.resize(1200, 800)

        self.canvas: GraphCanvas = canvas or GraphCanvas(parent=self)
        self.visualizer = self.canvas.visualizer
        self.setCentralWidget(self.canvas)

        self.canvas.node_selected.connect(self.on_node_selected)
        self.canvas.canvas_clicked.connect(lambda *_: self.statusBar().clearMessage())

        self._create_actions()
        self.update_window_title()

    def _create_actions(self) -> None:
        menu_file = self.menuBar().addMenu("&File")

        act_open = QAction("&Open graph...", self)
        act_open.setShortcut("Ctrl+O")
        act_open.triggered.connect(self.on_open)
        menu_file.addAction(act_open)

        act_clear = QAction("&Clear", self)
        act_clear.triggered.connect(self.on_clear)
        menu_file.addAction(act_clear)

        menu_file.addSeparator()
        act_exit = QAction("E&xit", self)
        act_exit.triggered.connect(self.close)
        menu_file.addAction(act_exit)

        menu_view = self.menuBar().addMenu("&View")

        act_reset = QAction("&Reset view", self)
        act_reset.setShortcut("Ctrl+R")
        act_reset.triggered.connect(self.visualizer.reset_view)
        menu_view.addAction(act_reset)

        act_axes = QAction("Show &guide axes", self)
        act_axes.setCheckable(True)
        act_axes.setChecked(self.visualizer.options.show_guide_axes)
        act_axes.toggled.connect(self.on_toggle_axes)
        menu_view.addAction(act_axes)

    def update_window_title(self) -> None:
        self.setWindowTitle(
            f"Graph Viewer 3D - {len(self.visualizer.nodes)} nodes, {len(self.visualizer.edges)} edges"
        )

    # ------------------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------------------

    def open_file(self, filepath: str) -> bool:
        self.visualizer.clear()
        try:
            load_graph_file(filepath, self.visualizer.store)
        except (OSError, GraphFileError) as e:
            logger.error(f"Could not load graph '{filepath}': {e}")
            QMessageBox.critical(self, "Open graph", f"Could not load the graph:\n{e}")
            return False
        finally:
            self.update_window_title()
        return True

    def on_open(self) -> None:
        filepath, _ = QFileDialog.getOpenFileName(self, "Open graph", "", "Graph files (*.json)")
        if filepath:
            self.open_file(filepath)

    def on_clear(self) -> None:
        self.visualizer.clear()
        self.update_window_title()

    def on_toggle_axes(self, checked: bool) -> None:
        self.visualizer.options.show_guide_axes = checked
        self.canvas.update()

    def on_node_selected(self, node: GraphNode) -> None:
        self.statusBar().showMessage(f"Selected: {node.label}")

    def closeEvent(self, event) -> None:
        self.canvas.stop()
        super().closeEvent(event)
