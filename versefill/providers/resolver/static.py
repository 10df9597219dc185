"""In-memory verse table resolver."""
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from .base import BaseResolver
from ...core.grammar import normalize_key, parse_reference
from ...core.models import ResolutionResult
from ...exceptions import ConfigurationError, NotFoundError

logger = logging.getLogger(__name__)


class StaticResolver(BaseResolver):
    """Resolve citations from a fixed verse table.

    Keys are matched by normalized form, so "john 3:16" finds an entry stored
    as "John 3:16". A range with no entry of its own is assembled from its
    individual verses when all of them are present.

    Example:
        >>> resolver = StaticResolver({"John 3:16": "For God so loved the world..."})
        >>> resolver.resolve("john 3:16").display_reference
        'John 3:16'
    """

    name = "static"

    def __init__(self, verses: Optional[Dict[str, str]] = None, config=None):
        super().__init__(config)
        self._verses: Dict[str, Tuple[str, str]] = {}
        for reference, text in (verses or {}).items():
            self.add(reference, text)

    @classmethod
    def from_json(cls, path: Union[str, Path], config=None) -> "StaticResolver":
        """Load a verse table from a JSON object of reference -> text.

        Args:
            path: Path to the JSON file
            config: Optional configuration

        Returns:
            StaticResolver instance

        Raises:
            ConfigurationError: If the file is missing or not a JSON object
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                verses = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not load verse table {path}: {e}")

        if not isinstance(verses, dict):
            raise ConfigurationError(f"Verse table {path} must be a JSON object")

        logger.info(f"Loaded {len(verses)} verses from {path}")
        return cls(verses, config=config)

    def add(self, reference: str, text: str) -> None:
        self._verses[normalize_key(reference)] = (reference.strip(), text)

    def __len__(self) -> int:
        return len(self._verses)

    def resolve(self, citation_text: str) -> ResolutionResult:
        parsed = parse_reference(citation_text)
        key = normalize_key(citation_text)

        if key in self._verses:
            reference, text = self._verses[key]
            return ResolutionResult(key, reference, text, self.config.translation)

        if parsed.is_range:
            parts = []
            for verse in range(parsed.start_verse, parsed.end_verse + 1):
                single = f"{parsed.book} {parsed.chapter}:{verse}"
                entry = self._verses.get(normalize_key(single))
                if entry is None:
                    break
                parts.append(entry[1])
            else:
                return ResolutionResult(key, str(parsed), " ".join(parts), self.config.translation)

        raise NotFoundError(f"Verse not found: {citation_text}", reference=citation_text)
