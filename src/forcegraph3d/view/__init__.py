"""
The VIEW layer: Qt widgets that draw the engine's frames and feed it input.
"""
