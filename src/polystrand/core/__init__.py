"""
Geometry core: vectors, oriented frames and the helix engine.
"""
