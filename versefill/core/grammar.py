"""Scripture citation grammar.

Recognises citations of the form::

    citation  := [ordinal] book chapter ":" verse ["-" verse]
    ordinal   := "1" | "2" | "3" | "1st" | "2nd" | "3rd" | "I" | "II" | "III"
    book      := multi-word book | word
    chapter   := digit+
    verse     := digit+

Matching is case-insensitive. A book is a single word unless it is one of the
named multi-word books, so "Song of Solomon 2:4" is one citation while
"Read the Gospel of John 3:16" yields "John 3:16".

Example:
    >>> [span.raw_text for span in match("See John 3:16 and 1 Cor 13:4-7")]
    ['John 3:16', '1 Cor 13:4-7']
"""
import re
from typing import List, Optional, Sequence, Tuple

from .models import Reference, Span
from ..exceptions import ValidationError

_ORDINAL = r"(?:(?P<ordinal>1st|2nd|3rd|[123])\s*|(?P<roman>III|II|I)\s+)"
_WORD = r"[A-Za-z]+"
# Books whose names contain "of"; tried before the single-word form
_MULTI_WORD_BOOKS = (
    r"song\s+of\s+(?:solomon|songs)",
    r"acts\s+of\s+the\s+apostles",
    r"wisdom\s+of\s+solomon",
)
_BOOK = rf"(?P<book>{'|'.join(_MULTI_WORD_BOOKS)}|{_WORD})"

CITATION_PATTERN = re.compile(
    r"(?<![A-Za-z0-9])"
    rf"{_ORDINAL}?"
    rf"{_BOOK}\s+"
    r"(?P<chapter>\d+):(?P<verse>\d+)"
    r"(?:\s*[-–]\s*(?P<end_verse>\d+))?"
    r"(?!\d)",
    re.IGNORECASE,
)

# What the splicer leaves behind: ` - "verse text"`
EXPANSION_MARKER = re.compile(r'\s*[-–]\s*["“]')

_ORDINALS = {
    "1": "1", "1st": "1", "i": "1",
    "2": "2", "2nd": "2", "ii": "2",
    "3": "3", "3rd": "3", "iii": "3",
}

Region = Tuple[int, int]


def match(text: str, expanded_regions: Sequence[Region] = ()) -> List[Span]:
    """Find citation spans in text.

    Spans already followed by an expansion marker, or overlapping one of
    ``expanded_regions``, are not reported.

    Args:
        text: Text to scan
        expanded_regions: (start, end) intervals produced by earlier splices

    Returns:
        Non-overlapping spans ordered by start offset
    """
    spans = []
    if not text:
        return spans

    for found in CITATION_PATTERN.finditer(text):
        span = Span(found.start(), found.end(), found.group(0))
        if is_expanded(text, span.end):
            continue
        if any(span.overlaps(start, end) for start, end in expanded_regions):
            continue
        spans.append(span)

    return spans


def is_expanded(text: str, end: int) -> bool:
    """Check whether the citation ending at ``end`` is followed by an expansion marker."""
    return EXPANSION_MARKER.match(text, end) is not None


def normalize_key(raw_text: str) -> str:
    """Canonicalise a citation for deduplication.

    Case-folds, drops whitespace, maps ordinal prefixes to digits and strips
    leading zeros, so "I John 03:16" and "1john 3:16" share the key "1john3:16".

    Args:
        raw_text: Citation text as typed

    Returns:
        Normalized key
    """
    found = CITATION_PATTERN.fullmatch(raw_text.strip())
    if not found:
        return re.sub(r"\s+", "", raw_text).casefold()

    ordinal = _canonical_ordinal(found)
    book = re.sub(r"\s+", "", found.group("book")).casefold()
    key = f"{ordinal or ''}{book}{int(found.group('chapter'))}:{int(found.group('verse'))}"
    if found.group("end_verse"):
        key += f"-{int(found.group('end_verse'))}"
    return key


def parse_reference(text: str) -> Reference:
    """Parse a single citation into its parts.

    Args:
        text: Citation such as "1 John 3:16" or "Romans 8:28-30"

    Returns:
        Reference instance

    Raises:
        ValidationError: If text is not exactly one well-formed citation
    """
    found = CITATION_PATTERN.fullmatch(text.strip()) if text else None
    if not found:
        raise ValidationError(f"Invalid verse reference format: {text!r}", reference=text or "")

    ordinal = _canonical_ordinal(found)
    book = " ".join(found.group("book").split())
    if ordinal:
        book = f"{ordinal} {book}"

    start_verse = int(found.group("verse"))
    end_verse = int(found.group("end_verse")) if found.group("end_verse") else start_verse
    if end_verse < start_verse:
        raise ValidationError(f"Verse range ends before it starts: {text!r}", reference=text)

    return Reference(
        book=book,
        chapter=int(found.group("chapter")),
        start_verse=start_verse,
        end_verse=end_verse,
    )


def _canonical_ordinal(found: "re.Match") -> Optional[str]:
    prefix = found.group("ordinal") or found.group("roman")
    if not prefix:
        return None
    return _ORDINALS[prefix.lower()]
