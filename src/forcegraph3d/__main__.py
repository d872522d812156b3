"""Command-line entry point: python -m forcegraph3d"""
import sys

from forcegraph3d.app.main import main

if __name__ == "__main__":
    sys.exit(main())
