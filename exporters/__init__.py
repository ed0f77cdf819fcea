"""Exporters for converting results and module graphs to various output formats."""

from .ascii_exporter import to_ascii
from .json_exporter import to_json, location_to_json, candidates_to_json
from .text_exporter import location_to_text, candidates_to_text

__all__ = [
    "to_ascii",
    "to_json",
    "location_to_json",
    "candidates_to_json",
    "location_to_text",
    "candidates_to_text",
]
