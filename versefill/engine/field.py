"""Host-facing citation engine for one text field."""
import logging
from typing import Callable, List, Optional

from ..config import Config
from ..core import grammar
from ..core.change_detector import should_rescan
from ..core.field_state import FieldState
from ..core.models import Citation, CitationStatus
from .dispatcher import ResolutionDispatcher

logger = logging.getLogger(__name__)


class ScriptureField:
    """Live scripture citation detection and expansion for one input field.

    The host forwards every text change to :meth:`on_text_change`. Newly typed
    citations are resolved in the background (one at a time) and spliced into
    the field's live text; the host receives the new text through
    ``on_text_replaced``. Each field owns its own state; create one per input
    and call :meth:`dispose` when the input goes away.

    Example:
        >>> field = ScriptureField(resolver, on_text_replaced=textbox.set_value)
        >>> field.on_text_change("Read John 3:16 today")
        >>> await field.drain()
        >>> field.text
        'Read John 3:16 - "For God so loved the world..." today'
    """

    def __init__(
        self,
        resolver,
        notifier=None,
        config: Optional[Config] = None,
        on_status_change: Optional[Callable[[Citation], None]] = None,
        on_text_replaced: Optional[Callable[[str], None]] = None,
    ):
        """Initialize the field.

        Args:
            resolver: BaseResolver used for lookups
            notifier: Optional BaseNotifier for success and error messages
            config: Optional Config (auto_resolve, resolution_timeout)
            on_status_change: Called whenever a citation changes status
            on_text_replaced: Called with the field's new text after a splice
        """
        self.config = config if config is not None else Config()
        self.state = FieldState(on_status_change=on_status_change)
        self.dispatcher = ResolutionDispatcher(
            self.state,
            resolver,
            notifier=notifier,
            timeout=self.config.resolution_timeout,
            on_text_replaced=on_text_replaced,
        )

    @property
    def text(self) -> str:
        return self.state.current_text

    @property
    def citations(self) -> List[Citation]:
        return list(self.state.citations.values())

    @property
    def is_busy(self) -> bool:
        return self.dispatcher.is_busy

    @property
    def disposed(self) -> bool:
        return self.state.disposed

    def on_text_change(self, text: str) -> str:
        """Handle a text change from the host.

        Args:
            text: The field's new text

        Returns:
            The text the field now holds
        """
        if self.state.disposed:
            return text

        state = self.state
        state.update_text(text)
        rescan = should_rescan(state.previous_text, text, state.last_programmatic_edit)
        state.last_programmatic_edit = None

        if rescan:
            self._detect()
        return state.current_text

    def request_expand(self, reference: str) -> bool:
        """Ask for a citation to be resolved, e.g. from an "Expand" button.

        Only DETECTED and FAILED citations can be requested; this is the sole
        way out of FAILED.

        Args:
            reference: Normalized key or the citation as typed

        Returns:
            True if the citation was queued
        """
        if self.state.disposed:
            return False

        citation = self.state.get(grammar.normalize_key(reference))
        if citation is None:
            logger.debug(f"No citation known for {reference!r}")
            return False

        return self.dispatcher.on_candidates([citation], retry=True) > 0

    def affordances(self) -> List[Citation]:
        """Citations still present in the text that the user could expand.

        Returns:
            DETECTED and FAILED citations whose text is present and unexpanded
        """
        live_keys = {
            grammar.normalize_key(span.raw_text)
            for span in grammar.match(self.state.current_text, self.state.expanded_regions())
        }
        return [
            citation
            for citation in self.state.citations.values()
            if citation.status in (CitationStatus.DETECTED, CitationStatus.FAILED)
            and citation.normalized_key in live_keys
        ]

    async def drain(self) -> None:
        """Wait for all queued lookups to finish."""
        await self.dispatcher.drain()

    def dispose(self) -> None:
        """Tear the field down; outstanding results are discarded."""
        if self.state.disposed:
            return
        self.state.dispose()
        self.dispatcher.cancel()
        logger.debug("Field disposed")

    def _detect(self) -> None:
        state = self.state
        spans = grammar.match(state.current_text, state.expanded_regions())

        candidates = []
        seen = set()
        for span in spans:
            key = grammar.normalize_key(span.raw_text)
            if key in seen or key in state.citations:
                continue
            seen.add(key)
            candidates.append(Citation(raw_text=span.raw_text, normalized_key=key))

        if not candidates:
            return

        logger.debug(f"Detected {len(candidates)} new citation(s): {[c.raw_text for c in candidates]}")
        if self.config.auto_resolve:
            self.dispatcher.on_candidates(candidates)
        else:
            for candidate in candidates:
                state.add_citation(candidate.raw_text, candidate.normalized_key)
