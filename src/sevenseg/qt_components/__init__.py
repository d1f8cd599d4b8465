"""PyQt6 GUI components for sevenseg."""

from .uc_seven_segment import PYQT6_AVAILABLE

if PYQT6_AVAILABLE:
    from .uc_seven_segment import UCSevenSegment

__all__ = [
    'PYQT6_AVAILABLE',
    'UCSevenSegment',
]
