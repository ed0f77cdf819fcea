"""Editor-facing providers: go-to-definition and completion."""

from .document import Document, Position, Range
from .definition import find_definition
from .completion import CompletionCandidate, CandidateKind, provide_completions

__all__ = [
    "Document",
    "Position",
    "Range",
    "find_definition",
    "CompletionCandidate",
    "CandidateKind",
    "provide_completions",
]
