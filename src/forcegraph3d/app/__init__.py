"""
Desktop host application (PySide6) for the graph viewer.
"""
