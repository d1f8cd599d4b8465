"""sevenseg version information."""

__version__ = "0.3.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.1.0 - Geometry generator and segment controller
# 0.2.0 - SVG writer, Pillow raster output, JSON config
# 0.3.0 - Demo animation as GIF, PyQt6 preview widget, CLI
