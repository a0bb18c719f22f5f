"""
The MODEL layer contains pure data structures for the layout resolver.
It has NO knowledge of the GUI (Qt).
It deals with Expressions, Variable Environments and Pixel Geometry.
"""
