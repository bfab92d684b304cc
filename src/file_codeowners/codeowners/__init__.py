"""
CODEOWNERS document model, parser and serializer.
"""

from file_codeowners.codeowners.document import Codeowners
from file_codeowners.codeowners.parser import parse_lines, parse_owners
from file_codeowners.codeowners.serializer import render_line, render_lines, write_atomic

__all__ = [
    "Codeowners",
    "parse_lines",
    "parse_owners",
    "render_line",
    "render_lines",
    "write_atomic",
]
