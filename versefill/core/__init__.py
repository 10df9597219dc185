"""Citation grammar, change detection, splicing and per-field state."""
from .models import (
    CitationStatus,
    NotificationKind,
    Span,
    Reference,
    Citation,
    ResolutionResult,
    Splice,
)
from .grammar import match, normalize_key, parse_reference
from .change_detector import should_rescan
from .field_state import CancellationToken, FieldState

__all__ = [
    "CitationStatus",
    "NotificationKind",
    "Span",
    "Reference",
    "Citation",
    "ResolutionResult",
    "Splice",
    "match",
    "normalize_key",
    "parse_reference",
    "should_rescan",
    "CancellationToken",
    "FieldState",
]
