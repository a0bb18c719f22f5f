"""
The VIEW layer hosts real Qt widgets and applies resolved rectangles to them.
Only this layer imports PySide6.
"""
