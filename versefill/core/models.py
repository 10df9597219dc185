"""Data models for the citation engine."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class CitationStatus(Enum):
    """Resolution status of a detected citation."""
    DETECTED = "detected"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FAILED = "failed"


class NotificationKind(Enum):
    """Kinds of user-facing notifications."""
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Span:
    """A citation-shaped substring of a text.

    Attributes:
        start: Offset of the first character
        end: Offset one past the last character
        raw_text: The exact matched substring
    """
    start: int
    end: int
    raw_text: str

    def overlaps(self, start: int, end: int) -> bool:
        """Check whether this span shares any character with [start, end)."""
        return self.start < end and start < self.end


@dataclass(frozen=True)
class Reference:
    """A parsed scripture reference.

    Attributes:
        book: Book name as typed, with a canonical ordinal ("1 John")
        chapter: Chapter number
        start_verse: First verse
        end_verse: Last verse (same as start_verse for a single verse)
    """
    book: str
    chapter: int
    start_verse: int
    end_verse: int

    @property
    def is_range(self) -> bool:
        return self.end_verse != self.start_verse

    def __str__(self) -> str:
        if self.is_range:
            return f"{self.book} {self.chapter}:{self.start_verse}-{self.end_verse}"
        return f"{self.book} {self.chapter}:{self.start_verse}"


@dataclass
class Citation:
    """A detected citation tracked by a field.

    Attributes:
        raw_text: The exact substring that was matched
        normalized_key: Canonical form used for deduplication
        status: Current resolution status
        display_reference: Reference string reported by the resolver
        resolved_text: Verse text once resolved
        error: Message of the last failure, if any
    """
    raw_text: str
    normalized_key: str
    status: CitationStatus = CitationStatus.DETECTED
    display_reference: Optional[str] = None
    resolved_text: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (CitationStatus.RESOLVED, CitationStatus.FAILED)

    def to_dict(self) -> Dict[str, Any]:
        """Convert citation to dictionary."""
        return {
            "raw_text": self.raw_text,
            "normalized_key": self.normalized_key,
            "status": self.status.value,
            "display_reference": self.display_reference,
            "resolved_text": self.resolved_text,
            "error": self.error,
        }


@dataclass(frozen=True)
class ResolutionResult:
    """A resolver's answer for one citation.

    Attributes:
        normalized_key: Key of the citation that was resolved
        display_reference: Reference string to show in place of the raw text
        resolved_text: Verse text
        translation: Translation the text was taken from, if known
    """
    normalized_key: str
    display_reference: Optional[str]
    resolved_text: str
    translation: Optional[str] = None


@dataclass(frozen=True)
class Splice:
    """Outcome of a successful splice.

    Attributes:
        text: The full text after replacement
        start: Offset where the expansion begins
        end: Offset one past the end of the expansion
        expansion: The inserted expansion string
    """
    text: str
    start: int
    end: int
    expansion: str
