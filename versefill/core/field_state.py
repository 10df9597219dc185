"""Per-field citation state."""
import logging
from typing import Callable, Dict, List, Optional

from .grammar import Region
from .models import Citation, CitationStatus, Splice

logger = logging.getLogger(__name__)

StatusListener = Callable[[Citation], None]


class CancellationToken:
    """Cancellation flag shared by a field and its outstanding resolutions."""

    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class FieldState:
    """Citation state owned by exactly one input field.

    Holds the live text, every known citation keyed by its normalized key,
    and the intervals the splicer's expansions occupy. Only the engine's own
    operations mutate it.

    Attributes:
        current_text: Text the field currently holds
        previous_text: Text before the last change event
        citations: normalized_key -> Citation, in detection order
        regions: (start, end) intervals of the current text covered by
            expansions, kept in step with every edit
        last_programmatic_edit: Text produced by the last splice, until the
            next change-detector pass consumes it
        token: Cancelled when the field is disposed
    """

    def __init__(self, text: str = "", on_status_change: Optional[StatusListener] = None):
        self.current_text = text
        self.previous_text = ""
        self.citations: Dict[str, Citation] = {}
        self.regions: List[Region] = []
        self.last_programmatic_edit: Optional[str] = None
        self.token = CancellationToken()
        self._on_status_change = on_status_change

    @property
    def disposed(self) -> bool:
        return self.token.cancelled

    @property
    def resolving_count(self) -> int:
        return sum(1 for c in self.citations.values() if c.status == CitationStatus.RESOLVING)

    def get(self, normalized_key: str) -> Optional[Citation]:
        return self.citations.get(normalized_key)

    def add_citation(self, raw_text: str, normalized_key: str) -> Citation:
        """Register a newly detected citation.

        Args:
            raw_text: Matched substring
            normalized_key: Deduplication key

        Returns:
            The new Citation, in status DETECTED
        """
        citation = Citation(raw_text=raw_text, normalized_key=normalized_key)
        self.citations[normalized_key] = citation
        self._emit(citation)
        return citation

    def set_status(self, citation: Citation, status: CitationStatus, **fields) -> None:
        """Move a citation to a new status and report the change.

        Args:
            citation: Citation owned by this field
            status: New status
            **fields: Citation attributes to update alongside the status
        """
        citation.status = status
        for name, value in fields.items():
            setattr(citation, name, value)
        self._emit(citation)

    def forget(self, normalized_key: str) -> None:
        """Drop a citation so it can be detected afresh."""
        self.citations.pop(normalized_key, None)

    def update_text(self, text: str) -> None:
        """Adopt text from the host, moving expanded regions with the edit.

        The edit is taken to be the span between the longest common prefix
        and suffix of the old and new text. Regions before it stay put,
        regions after it shift, and a region the edit falls inside grows or
        shrinks with it. A region that is deleted outright is dropped.

        Args:
            text: The field's new text
        """
        old = self.current_text
        self.previous_text, self.current_text = old, text
        if not self.regions or old == text:
            return

        limit = min(len(old), len(text))
        prefix = 0
        while prefix < limit and old[prefix] == text[prefix]:
            prefix += 1
        suffix = 0
        while suffix < limit - prefix and old[-1 - suffix] == text[-1 - suffix]:
            suffix += 1

        old_end = len(old) - suffix
        new_end = len(text) - suffix
        delta = len(text) - len(old)

        regions = []
        for start, end in self.regions:
            if end <= prefix:
                regions.append((start, end))
            elif start >= old_end:
                regions.append((start + delta, end + delta))
            else:
                start = min(start, prefix)
                end = end + delta if end >= old_end else new_end
                if end > start:
                    regions.append((start, end))
        self.regions = regions

    def record_splice(self, splice: Splice) -> None:
        """Adopt the splicer's output as the current text."""
        delta = len(splice.text) - len(self.current_text)
        # The replaced citation lies outside every region
        self.regions = [
            (start + delta, end + delta) if start >= splice.start else (start, end)
            for start, end in self.regions
        ]
        self.regions.append((splice.start, splice.end))
        self.current_text = splice.text
        self.last_programmatic_edit = splice.text

    def expanded_regions(self) -> List[Region]:
        """Intervals of the current text covered by expansions."""
        return sorted(self.regions)

    def dispose(self) -> None:
        self.token.cancel()

    def _emit(self, citation: Citation) -> None:
        if self._on_status_change is None:
            return
        try:
            self._on_status_change(citation)
        except Exception as e:
            logger.error(f"Status listener failed for {citation.raw_text!r}: {e}")
