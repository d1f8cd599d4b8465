"""
sevenseg Core - data model shared by the generator, controller and renderers.

Models: Data classes only (SegmentName, SegmentShapeParams, parts, etc.)
"""
