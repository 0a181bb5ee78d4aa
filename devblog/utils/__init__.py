"""
Utility functions
"""
from .text_utils import to_storage, to_display, strip_line_breaks, make_preview

__all__ = ['to_storage', 'to_display', 'strip_line_breaks', 'make_preview']
