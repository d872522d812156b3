"""
Run with: python -m forcegraph3d [graph.json]
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from forcegraph3d.app.application import create_app
from forcegraph3d.app.main_window import MainWindow
from forcegraph3d.logging_config import setup_logging

SAMPLE_EDGES = (
    ("A", "B", "knows"),
    ("A", "C", "knows"),
    ("C", "D", "likes"),
    ("D", "E", "likes"),
    ("E", "F", "follows"),
)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="forcegraph3d", description="Interactive 3D force-directed graph viewer.")
    parser.add_argument("graph", nargs="?", help="JSON edge list to open (a small sample graph is shown otherwise)")
    parser.add_argument("--debug", action="store_true", help="log at DEBUG level")
    parser.add_argument("--log-file", help="also write the log to this file")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    app = create_app()
    win = MainWindow()

    if args.graph:
        win.open_file(args.graph)
    else:
        for source, target, label in SAMPLE_EDGES:
            win.visualizer.add_edge(source, target, label)
        win.update_window_title()

    win.show()
    win.canvas.start()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
