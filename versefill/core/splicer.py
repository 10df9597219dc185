"""Splice resolved verse text into the live field text."""
import logging
import re
from typing import Optional, Sequence

from .grammar import CITATION_PATTERN, Region, is_expanded
from .models import Splice

logger = logging.getLogger(__name__)


def format_expansion(reference: str, resolved_text: str) -> str:
    """Format the inline expansion for a citation.

    Args:
        reference: Reference shown before the verse text
        resolved_text: Verse text

    Returns:
        String of the form 'Reference - "verse text"'
    """
    return f'{reference} - "{resolved_text}"'


def apply(
    current_text: str,
    raw_text: str,
    resolved_text: str,
    display_reference: Optional[str] = None,
    expanded_regions: Sequence[Region] = (),
) -> Optional[Splice]:
    """Replace the first unexpanded occurrence of a citation with its expansion.

    The search runs against the text as it is now, so edits made while the
    lookup was in flight are preserved.

    Args:
        current_text: Live field text
        raw_text: Citation exactly as it was detected
        resolved_text: Verse text to insert
        display_reference: Resolver's reference string, used instead of raw_text
        expanded_regions: (start, end) intervals that must not be touched

    Returns:
        Splice with the new text, or None if the citation is no longer present
    """
    if not raw_text or not current_text:
        return None

    pattern = re.compile(
        r"(?<!\w)" + re.escape(raw_text) + r"(?!\w|\s*[-–]\s*\d)"
    )
    # Occurrences that are only part of a longer citation ("1 John 3:16") are skipped
    citations = [found.span() for found in CITATION_PATTERN.finditer(current_text)]

    for found in pattern.finditer(current_text):
        start, end = found.span()
        if is_expanded(current_text, end):
            continue
        if any(start < region_end and region_start < end for region_start, region_end in expanded_regions):
            continue
        if any(s < end and start < e and (s, e) != (start, end) for s, e in citations):
            continue

        reference = (display_reference or "").strip() or raw_text
        expansion = format_expansion(reference, resolved_text)
        text = current_text[:start] + expansion + current_text[end:]
        return Splice(text=text, start=start, end=start + len(expansion), expansion=expansion)

    logger.debug(f"Citation no longer present in field text: {raw_text!r}")
    return None
