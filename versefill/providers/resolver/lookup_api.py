"""Resolver backed by the community site's verse lookup endpoint."""
import logging
from typing import Optional

import requests

from .base import BaseResolver
from ...core.grammar import normalize_key, parse_reference
from ...core.models import ResolutionResult
from ...exceptions import ConfigurationError, NetworkError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Filler the verse database returns for verses it has no real text for
PLACEHOLDER_MARKERS = (
    "[",
    "text for",
    "The word came according to",
    "Scripture from",
    "Biblical truth from",
)


def is_placeholder_text(text: str) -> bool:
    """Check whether verse text is database filler rather than scripture."""
    return any(marker in text for marker in PLACEHOLDER_MARKERS)


class LookupAPIResolver(BaseResolver):
    """Resolve citations with ``POST {api_url}``.

    The endpoint takes ``{"reference": ..., "version": ...}`` and answers with
    either ``{"reference", "text"}`` or ``{"verse": {"reference", "text"}}``.
    404 means the verse is unknown, 400 that the reference was rejected.
    """

    name = "lookup_api"

    def __init__(self, config, session: Optional[requests.Session] = None):
        """Initialize the lookup API resolver.

        Args:
            config: Configuration object with api_url
            session: Optional requests session to reuse connections

        Raises:
            ConfigurationError: If api_url is missing
        """
        super().__init__(config)

        if not self.config.api_url:
            raise ConfigurationError("VERSEFILL_API_URL not configured")

        self.api_url = self.config.api_url
        self.session = session or requests.Session()
        logger.info(f"Lookup API resolver initialized for {self.api_url}")

    def resolve(self, citation_text: str) -> ResolutionResult:
        reference = citation_text.strip()
        parse_reference(reference)

        self._rate_limit()

        headers = {"Content-Type": "application/json"}
        if self.config.api_token:
            headers["Authorization"] = f"Bearer {self.config.api_token}"

        data = {"reference": reference, "version": self.config.translation}

        try:
            response = self.session.post(
                self.api_url,
                headers=headers,
                json=data,
                timeout=self.config.resolution_timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Verse lookup request failed for {reference}: {e}")
            raise NetworkError(f"Verse lookup request failed: {e}", reference=reference)

        if response.status_code == 404:
            raise NotFoundError(self._message(response, f"Verse not found: {reference}"), reference=reference)
        if response.status_code == 400:
            raise ValidationError(self._message(response, "Invalid verse reference"), reference=reference)
        if response.status_code != 200:
            logger.error(f"Verse lookup error: {response.status_code}, {response.text}")
            raise NetworkError(f"Verse lookup error: {response.status_code}", reference=reference)

        try:
            payload = response.json()
        except ValueError as e:
            raise NetworkError(f"Verse lookup returned invalid JSON: {e}", reference=reference)

        if not isinstance(payload, dict):
            raise NetworkError("Verse lookup returned an unexpected payload", reference=reference)

        verse = payload.get("verse") or {}
        text = (verse.get("text") or payload.get("text") or "").strip()
        display_reference = verse.get("reference") or payload.get("reference") or reference
        translation = verse.get("version") or payload.get("version") or self.config.translation

        if not text:
            raise NotFoundError(f"Verse not found: {reference}", reference=reference)
        if self.config.reject_placeholders and is_placeholder_text(text):
            logger.warning(f"Placeholder text returned for {reference}: {text[:60]!r}")
            raise NotFoundError(f"No authentic text for {reference}", reference=reference)

        return ResolutionResult(normalize_key(reference), display_reference, text, translation)

    @staticmethod
    def _message(response: requests.Response, default: str) -> str:
        try:
            payload = response.json()
        except ValueError:
            return default
        if isinstance(payload, dict):
            return payload.get("message") or default
        return default
