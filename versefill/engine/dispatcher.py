"""Resolution dispatcher.

Owns the lookup queue for one field. Citations are resolved one at a time in
detection order, which keeps splices serialized: no two splices ever search
the same text concurrently, so no offset reconciliation is needed.

Workflow per citation:
1. DETECTED: queued (FIFO)
2. RESOLVING: the resolver runs, off the event loop if it is synchronous
3. RESOLVED: splice succeeded, expansion recorded, host handed the new text
   FAILED: resolver error or timeout, text untouched, one error notification
   (dropped): the citation was edited away before the lookup finished
"""

import asyncio
import inspect
import logging
from collections import deque
from typing import Callable, Deque, Iterable, List, Optional

from ..core import splicer
from ..core.field_state import CancellationToken, FieldState
from ..core.models import Citation, CitationStatus, NotificationKind, ResolutionResult
from ..exceptions import NetworkError, NotFoundError, ResolutionError

logger = logging.getLogger(__name__)

TextListener = Callable[[str], None]


class ResolutionTask:
    """One outstanding lookup, bound to its field's cancellation token.

    Attributes:
        citation: Citation being resolved
        token: Cancelled when the owning field is disposed
        future: asyncio task running the lookup
    """

    def __init__(self, citation: Citation, token: CancellationToken):
        self.citation = citation
        self.token = token
        self.future: Optional[asyncio.Task] = None

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def __repr__(self) -> str:
        return f"ResolutionTask({self.citation.raw_text!r}, cancelled={self.cancelled})"


class ResolutionDispatcher:
    """Queue and run citation lookups for a single field."""

    def __init__(
        self,
        state: FieldState,
        resolver,
        notifier=None,
        timeout: Optional[float] = 10.0,
        on_text_replaced: Optional[TextListener] = None,
    ):
        """Initialize the dispatcher.

        Args:
            state: FieldState this dispatcher works for
            resolver: BaseResolver (plain or coroutine ``resolve``)
            notifier: Optional BaseNotifier for success and error messages
            timeout: Seconds before a lookup counts as a network failure
                (None to wait indefinitely)
            on_text_replaced: Called with the new text after each splice
        """
        self.state = state
        self.resolver = resolver
        self.notifier = notifier
        self.timeout = timeout
        self.on_text_replaced = on_text_replaced

        self._queue: Deque[Citation] = deque()
        self._current: Optional[ResolutionTask] = None

    @property
    def in_flight(self) -> Optional[ResolutionTask]:
        return self._current

    @property
    def pending(self) -> List[Citation]:
        return list(self._queue)

    @property
    def is_busy(self) -> bool:
        return self._current is not None or bool(self._queue)

    def on_candidates(self, candidates: Iterable[Citation], retry: bool = False) -> int:
        """Queue citations for resolution.

        New keys are registered in the field state. Known keys are ignored
        unless ``retry`` is set and the citation is DETECTED or FAILED, which
        is how a user-triggered expand re-enters the queue.

        Args:
            candidates: Citations in detection order
            retry: Whether the user explicitly asked for these citations

        Returns:
            Number of citations queued
        """
        if self.state.disposed:
            return 0

        queued = 0
        for candidate in candidates:
            citation = self.state.get(candidate.normalized_key)

            if citation is None:
                citation = self.state.add_citation(candidate.raw_text, candidate.normalized_key)
            elif not retry or citation.status not in (CitationStatus.DETECTED, CitationStatus.FAILED):
                continue
            elif citation in self._queue:
                continue
            elif citation.status == CitationStatus.FAILED:
                self.state.set_status(citation, CitationStatus.DETECTED, error=None)

            self._queue.append(citation)
            queued += 1

        if queued:
            logger.debug(f"Queued {queued} citation(s); {len(self._queue)} waiting")
        self._pump()
        return queued

    def cancel(self) -> None:
        """Drop queued citations and abandon the lookup in flight."""
        self._queue.clear()
        task, self._current = self._current, None
        if task is not None and task.future is not None and not task.future.done():
            task.future.cancel()

    async def drain(self) -> None:
        """Wait until every queued citation has been processed."""
        self._pump()
        while self._current is not None and not self.state.disposed:
            future = self._current.future
            if future is None:
                break
            await asyncio.gather(future, return_exceptions=True)

    def _pump(self) -> None:
        """Start the next lookup if nothing is in flight."""
        if self._current is not None or self.state.disposed:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._queue:
                logger.debug(f"No running event loop; {len(self._queue)} citation(s) wait for drain()")
            return

        while self._queue:
            citation = self._queue.popleft()
            # Skip entries that were dropped or resolved while waiting
            if self.state.get(citation.normalized_key) is not citation:
                continue
            if citation.status != CitationStatus.DETECTED:
                continue

            task = ResolutionTask(citation, self.state.token)
            self._current = task
            self.state.set_status(citation, CitationStatus.RESOLVING)
            logger.info(f"Resolving {citation.raw_text!r}")
            task.future = loop.create_task(self._run(task))
            return

    async def _run(self, task: ResolutionTask) -> None:
        citation = task.citation
        result: Optional[ResolutionResult] = None
        error: Optional[ResolutionError] = None

        try:
            try:
                result = await self._call_resolver(citation.raw_text)
            except ResolutionError as e:
                error = e
            except Exception as e:
                logger.exception(f"Resolver raised unexpectedly for {citation.raw_text!r}")
                error = ResolutionError(str(e), reference=citation.raw_text)

            if task.cancelled:
                logger.debug(f"Field disposed; discarding result for {citation.raw_text!r}")
            elif error is not None:
                self._fail(citation, error)
            else:
                self._complete(citation, result)
        finally:
            if self._current is task:
                self._current = None
            if not self.state.disposed:
                self._pump()

    async def _call_resolver(self, raw_text: str) -> ResolutionResult:
        resolve = self.resolver.resolve
        if inspect.iscoroutinefunction(resolve):
            call = resolve(raw_text)
        else:
            call = asyncio.to_thread(resolve, raw_text)

        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError:
            raise NetworkError(f"Lookup timed out after {self.timeout}s", reference=raw_text)

    def _complete(self, citation: Citation, result: ResolutionResult) -> None:
        """Splice a successful lookup into the live text."""
        if not isinstance(result, ResolutionResult):
            logger.error(f"Resolver returned {type(result).__name__} for {citation.raw_text!r}, expected ResolutionResult")
            self._fail(citation, ResolutionError("Resolver returned an invalid result", reference=citation.raw_text))
            return
        if not isinstance(result.resolved_text, str) or not result.resolved_text.strip():
            self._fail(citation, NotFoundError(f"Verse not found: {citation.raw_text}", reference=citation.raw_text))
            return

        splice = splicer.apply(
            self.state.current_text,
            citation.raw_text,
            result.resolved_text,
            display_reference=result.display_reference,
            expanded_regions=self.state.expanded_regions(),
        )
        if splice is None:
            logger.info(f"{citation.raw_text!r} was edited away before it resolved; dropping result")
            # Dropping the entry lets a retyped citation be detected again
            self.state.forget(citation.normalized_key)
            return

        reference = (result.display_reference or "").strip() or citation.raw_text
        self.state.record_splice(splice)
        self.state.set_status(
            citation,
            CitationStatus.RESOLVED,
            display_reference=reference,
            resolved_text=result.resolved_text,
            error=None,
        )
        logger.info(f"Expanded {citation.raw_text!r} at offset {splice.start}")

        if self.on_text_replaced is not None:
            try:
                self.on_text_replaced(splice.text)
            except Exception as e:
                logger.error(f"Text listener failed after expanding {citation.raw_text!r}: {e}")

        self._notify(NotificationKind.SUCCESS, f"Auto-populated verse text for {reference}")

    def _fail(self, citation: Citation, error: ResolutionError) -> None:
        self.state.set_status(citation, CitationStatus.FAILED, error=str(error))
        logger.warning(f"Could not resolve {citation.raw_text!r}: {error}")
        self._notify(
            NotificationKind.ERROR,
            f"Could not find {citation.raw_text}. You can continue typing manually.",
        )

    def _notify(self, kind: NotificationKind, message: str) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.notify(kind, message)
        except Exception as e:
            logger.error(f"Notifier failed: {e}")
