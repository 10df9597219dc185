"""Base resolver interface."""
from abc import abstractmethod

from ..base import BaseProvider
from ...core.models import ResolutionResult


class BaseResolver(BaseProvider):
    """Abstract base class for citation resolvers.

    A resolver maps a citation string to verse text. Subclasses may implement
    ``resolve`` as a plain method (run off the event loop) or as a coroutine.
    """

    @abstractmethod
    def resolve(self, citation_text: str) -> ResolutionResult:
        """Resolve a citation to verse text.

        Args:
            citation_text: Citation exactly as typed (e.g., "John 3:16")

        Returns:
            ResolutionResult with the verse text

        Raises:
            NotFoundError: If there is no text for the citation
            NetworkError: If the lookup service cannot be reached
            ValidationError: If the citation is malformed
        """
        pass
