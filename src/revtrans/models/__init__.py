"""Data models for recovered Revelation records.

This module provides typed Python classes for the parse result: entries,
their fields, and the ordered entry list handed to writers.
"""

from .entry import SECRET_FIELD_ID, Entry, Field
from .entry_list import EntryList

__all__ = [
    "SECRET_FIELD_ID",
    "Entry",
    "EntryList",
    "Field",
]
