"""
Core source discovery components.
"""

from .file_processor import FileProcessor

__all__ = ['FileProcessor']
