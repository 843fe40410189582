"""
Shared utility helpers for filesystem and string handling.
"""

from .filesystem import copy_file_atomic, ensure_directory, file_lock, write_text_file
from .text import split_names

__all__ = [
    "copy_file_atomic",
    "ensure_directory",
    "file_lock",
    "write_text_file",
    "split_names",
]
