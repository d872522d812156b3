"""
Layout-and-View Engine
======================
The core of the graph viewer.

Why is this file needed?
------------------------
1. Physics: It moves the nodes (repulsion between all pairs, springs along edges).
2. Projection: It maps 3D positions to the screen and back for picking.
3. Interaction: It turns pointer input into drags, rotation, panning and zoom.

Note: This package should be pure Python/NumPy and should NOT import PySide6.
"""
