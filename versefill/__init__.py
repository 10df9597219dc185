"""versefill - live scripture citation detection and inline expansion.

A Python library for text fields that expand scripture citations as the
user types:
- Citation grammar matching ("John 3:16", "1 Cor 13:4-7")
- Serialized background lookups against pluggable resolvers
- Safe splicing into live text that never re-matches its own output
"""

from .config import Config
from .exceptions import (
    VersefillError,
    ConfigurationError,
    ResolutionError,
    NotFoundError,
    NetworkError,
    ValidationError,
)
from .core.models import (
    Citation,
    CitationStatus,
    NotificationKind,
    Reference,
    ResolutionResult,
    Span,
)
from .core.grammar import match, normalize_key, parse_reference
from .engine import ScriptureField

__version__ = "1.0.0"
__all__ = [
    "ScriptureField",
    "Config",
    "Citation",
    "CitationStatus",
    "NotificationKind",
    "Reference",
    "ResolutionResult",
    "Span",
    "match",
    "normalize_key",
    "parse_reference",
    "VersefillError",
    "ConfigurationError",
    "ResolutionError",
    "NotFoundError",
    "NetworkError",
    "ValidationError",
]
