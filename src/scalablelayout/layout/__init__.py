"""
The LAYOUT layer turns placements into pixel rectangles.
"""
