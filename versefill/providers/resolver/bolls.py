"""Resolver backed by the public bolls.life Bible API.

API format:
- Single verse: GET https://bolls.life/get-verse/{translation}/{book_id}/{chapter}/{verse}/
- Multiple verses: POST https://bolls.life/get-verses/ with a JSON body
"""
import logging
import re
from typing import Dict, List, Optional, Tuple

import requests
from bs4 import BeautifulSoup

from .base import BaseResolver
from ...core.grammar import normalize_key, parse_reference
from ...core.models import Reference, ResolutionResult
from ...exceptions import NetworkError, NotFoundError

logger = logging.getLogger(__name__)

BOLLS_API_BASE = "https://bolls.life"

# Book name to bolls.life book ID (standard Protestant order)
BOOK_ID_MAP = {
    'Genesis': 1, 'Exodus': 2, 'Leviticus': 3, 'Numbers': 4, 'Deuteronomy': 5,
    'Joshua': 6, 'Judges': 7, 'Ruth': 8, '1 Samuel': 9, '2 Samuel': 10,
    '1 Kings': 11, '2 Kings': 12, '1 Chronicles': 13, '2 Chronicles': 14,
    'Ezra': 15, 'Nehemiah': 16, 'Esther': 17, 'Job': 18, 'Psalms': 19,
    'Proverbs': 20, 'Ecclesiastes': 21, 'Song of Solomon': 22, 'Isaiah': 23,
    'Jeremiah': 24, 'Lamentations': 25, 'Ezekiel': 26, 'Daniel': 27,
    'Hosea': 28, 'Joel': 29, 'Amos': 30, 'Obadiah': 31, 'Jonah': 32,
    'Micah': 33, 'Nahum': 34, 'Habakkuk': 35, 'Zephaniah': 36, 'Haggai': 37,
    'Zechariah': 38, 'Malachi': 39, 'Matthew': 40, 'Mark': 41, 'Luke': 42,
    'John': 43, 'Acts': 44, 'Romans': 45, '1 Corinthians': 46, '2 Corinthians': 47,
    'Galatians': 48, 'Ephesians': 49, 'Philippians': 50, 'Colossians': 51,
    '1 Thessalonians': 52, '2 Thessalonians': 53, '1 Timothy': 54, '2 Timothy': 55,
    'Titus': 56, 'Philemon': 57, 'Hebrews': 58, 'James': 59, '1 Peter': 60,
    '2 Peter': 61, '1 John': 62, '2 John': 63, '3 John': 64, 'Jude': 65,
    'Revelation': 66
}

# Common short forms, without ordinal
BOOK_ALIASES = {
    'gen': 'Genesis', 'ex': 'Exodus', 'exod': 'Exodus', 'lev': 'Leviticus',
    'num': 'Numbers', 'deut': 'Deuteronomy', 'josh': 'Joshua', 'judg': 'Judges',
    'sam': 'Samuel', 'kgs': 'Kings', 'chron': 'Chronicles', 'neh': 'Nehemiah',
    'esth': 'Esther', 'ps': 'Psalms', 'psa': 'Psalms', 'psalm': 'Psalms',
    'prov': 'Proverbs', 'eccl': 'Ecclesiastes', 'song': 'Song of Solomon',
    'song of songs': 'Song of Solomon', 'acts of the apostles': 'Acts',
    'isa': 'Isaiah', 'jer': 'Jeremiah',
    'lam': 'Lamentations', 'ezek': 'Ezekiel', 'dan': 'Daniel', 'hos': 'Hosea',
    'obad': 'Obadiah', 'mic': 'Micah', 'nah': 'Nahum', 'hab': 'Habakkuk',
    'zeph': 'Zephaniah', 'hag': 'Haggai', 'zech': 'Zechariah', 'mal': 'Malachi',
    'matt': 'Matthew', 'mt': 'Matthew', 'mk': 'Mark', 'lk': 'Luke', 'jn': 'John',
    'rom': 'Romans', 'cor': 'Corinthians', 'gal': 'Galatians', 'eph': 'Ephesians',
    'phil': 'Philippians', 'col': 'Colossians', 'thess': 'Thessalonians',
    'tim': 'Timothy', 'tit': 'Titus', 'philem': 'Philemon', 'heb': 'Hebrews',
    'jas': 'James', 'pet': 'Peter', 'rev': 'Revelation', 'revelations': 'Revelation',
}

_BOOK_INDEX = {name.lower(): (name, book_id) for name, book_id in BOOK_ID_MAP.items()}


def lookup_book(book: str) -> Optional[Tuple[str, int]]:
    """Find the canonical name and bolls.life ID for a book.

    Args:
        book: Book as parsed from a citation, e.g. "1 Cor" or "Psalm"

    Returns:
        (canonical name, book id), or None for an unknown book
    """
    book = " ".join(book.split()).lower()
    if book in _BOOK_INDEX:
        return _BOOK_INDEX[book]

    ordinal, _, name = book.partition(" ") if book[:1].isdigit() else ("", "", book)
    name = BOOK_ALIASES.get(name, name).lower()
    candidate = f"{ordinal} {name}" if ordinal else name
    return _BOOK_INDEX.get(candidate)


def clean_verse_html(text: str) -> str:
    """Strip markup and Strong's numbers from bolls.life verse text.

    bolls.life embeds Strong's numbers as ``<S>3606</S>`` and footnotes in
    ``<sup>`` tags; both are dropped along with their content.
    """
    soup = BeautifulSoup(text, "html.parser")
    for tag in soup.find_all(["s", "sup"]):
        tag.decompose()
    return re.sub(r"\s+", " ", soup.get_text()).strip()


class BollsResolver(BaseResolver):
    """Resolve citations against bolls.life.

    Supports KJV, NKJV, NIV, ESV, NLT, NASB, WEB and the other translations
    bolls.life serves; the translation comes from ``config.translation``.
    """

    name = "bolls"

    def __init__(self, config=None, session: Optional[requests.Session] = None, base_url: str = BOLLS_API_BASE):
        super().__init__(config)
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def resolve(self, citation_text: str) -> ResolutionResult:
        parsed = parse_reference(citation_text)
        book = lookup_book(parsed.book)
        if book is None:
            raise NotFoundError(f"Unknown book: {parsed.book}", reference=citation_text)

        canonical, book_id = book
        if parsed.is_range:
            text = self._fetch_verse_range(book_id, parsed, citation_text)
        else:
            text = self._fetch_single_verse(book_id, parsed, citation_text)

        if not text:
            raise NotFoundError(f"Verse not found: {citation_text}", reference=citation_text)

        display = Reference(canonical, parsed.chapter, parsed.start_verse, parsed.end_verse)
        return ResolutionResult(normalize_key(citation_text), str(display), text, self.config.translation)

    def _fetch_single_verse(self, book_id: int, parsed: Reference, citation_text: str) -> str:
        """Fetch a single verse."""
        url = (
            f"{self.base_url}/get-verse/{self.config.translation}/"
            f"{book_id}/{parsed.chapter}/{parsed.start_verse}/"
        )
        data = self._request("GET", url, citation_text)
        if isinstance(data, dict) and data.get("text"):
            return clean_verse_html(data["text"])
        return ""

    def _fetch_verse_range(self, book_id: int, parsed: Reference, citation_text: str) -> str:
        """Fetch a range of verses using the bulk endpoint."""
        payload = [{
            "translation": self.config.translation,
            "book": book_id,
            "chapter": parsed.chapter,
            "verses": list(range(parsed.start_verse, parsed.end_verse + 1)),
        }]
        data = self._request("POST", f"{self.base_url}/get-verses/", citation_text, json=payload)
        if not data or not isinstance(data, list) or not data[0]:
            return ""
        verses: List[Dict] = data[0]
        return " ".join(clean_verse_html(v["text"]) for v in verses if v.get("text"))

    def _request(self, method: str, url: str, citation_text: str, **kwargs):
        self._rate_limit()
        try:
            response = self.session.request(method, url, timeout=self.config.resolution_timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"bolls.life request error for {citation_text}: {e}")
            raise NetworkError(f"bolls.life request failed: {e}", reference=citation_text)

        if response.status_code == 404:
            raise NotFoundError(f"Verse not found: {citation_text}", reference=citation_text)
        if response.status_code != 200:
            logger.error(f"bolls.life HTTP {response.status_code} for {citation_text}")
            raise NetworkError(f"bolls.life HTTP {response.status_code}", reference=citation_text)

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"bolls.life returned invalid JSON: {e}", reference=citation_text)
