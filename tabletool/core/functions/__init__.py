# tabletool/core/functions/__init__.py
"""
Functions - Common Utility Module

Module Components:
- file_converter: byte-to-text converter interface
"""

from tabletool.core.functions.file_converter import (
    BaseFileConverter,
    TextFileConverter,
)

__all__ = [
    "BaseFileConverter",
    "TextFileConverter",
]
