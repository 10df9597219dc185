"""Tests for the citation resolvers."""
import json

import pytest
import requests

from versefill.config import Config
from versefill.exceptions import ConfigurationError, NetworkError, NotFoundError, ValidationError
from versefill.providers import BollsResolver, LookupAPIResolver, StaticResolver, build_resolver
from versefill.providers.resolver.bolls import clean_verse_html, lookup_book
from versefill.providers.resolver.lookup_api import is_placeholder_text


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Stands in for requests.Session, returning canned responses."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def _send(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def post(self, url, **kwargs):
        return self._send("POST", url, **kwargs)

    def request(self, method, url, **kwargs):
        return self._send(method, url, **kwargs)


def api_config(**overrides):
    values = {"resolver": "lookup_api", "api_url": "https://example.org/api/lookup-verse",
              "enable_rate_limiting": False}
    values.update(overrides)
    return Config(**values)


class TestStaticResolver:
    """Test the in-memory verse table."""

    def test_resolve_by_normalized_key(self):
        resolver = StaticResolver({"John 3:16": "For God so loved..."})

        result = resolver.resolve("john  3:16")

        assert result.resolved_text == "For God so loved..."
        assert result.display_reference == "John 3:16"
        assert result.normalized_key == "john3:16"
        assert result.translation == "KJV"

    def test_range_assembled_from_verses(self):
        resolver = StaticResolver({"Romans 8:28": "a", "Romans 8:29": "b", "Romans 8:30": "c"})

        result = resolver.resolve("Romans 8:28-30")

        assert result.resolved_text == "a b c"
        assert result.display_reference == "Romans 8:28-30"

    def test_incomplete_range_not_found(self):
        resolver = StaticResolver({"Romans 8:28": "a"})

        with pytest.raises(NotFoundError):
            resolver.resolve("Romans 8:28-29")

    def test_missing_verse(self):
        with pytest.raises(NotFoundError) as exc_info:
            StaticResolver().resolve("Jude 1:24")
        assert exc_info.value.reference == "Jude 1:24"

    def test_malformed_citation(self):
        with pytest.raises(ValidationError):
            StaticResolver().resolve("not a verse")

    def test_from_json(self, tmp_path):
        path = tmp_path / "verses.json"
        path.write_text(json.dumps({"John 3:16": "For God so loved..."}), encoding="utf-8")

        resolver = StaticResolver.from_json(path)

        assert len(resolver) == 1
        assert resolver.resolve("John 3:16").resolved_text == "For God so loved..."

    def test_from_json_errors(self, tmp_path):
        with pytest.raises(ConfigurationError):
            StaticResolver.from_json(tmp_path / "missing.json")

        bad = tmp_path / "bad.json"
        bad.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            StaticResolver.from_json(bad)


class TestLookupAPIResolver:
    """Test the HTTP lookup endpoint resolver."""

    def test_requires_api_url(self):
        with pytest.raises(ConfigurationError):
            LookupAPIResolver(Config(api_url=None))

    def test_resolve_nested_payload(self):
        session = FakeSession(FakeResponse(200, {"verse": {"reference": "John 3:16", "text": " For God so loved... "}}))
        resolver = LookupAPIResolver(api_config(api_token="secret", translation="NIV"), session=session)

        result = resolver.resolve("john 3:16")

        assert result.resolved_text == "For God so loved..."
        assert result.display_reference == "John 3:16"
        method, url, kwargs = session.requests[0]
        assert (method, url) == ("POST", "https://example.org/api/lookup-verse")
        assert kwargs["json"] == {"reference": "john 3:16", "version": "NIV"}
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        assert kwargs["timeout"] == 10.0

    def test_resolve_flat_payload(self):
        session = FakeSession(FakeResponse(200, {"reference": "Romans 8:28", "text": "And we know..."}))
        resolver = LookupAPIResolver(api_config(), session=session)

        result = resolver.resolve("Romans 8:28")

        assert result.resolved_text == "And we know..."
        assert "Authorization" not in session.requests[0][2]["headers"]

    def test_invalid_reference_never_sent(self):
        session = FakeSession(FakeResponse(200, {"text": "x"}))
        resolver = LookupAPIResolver(api_config(), session=session)

        with pytest.raises(ValidationError):
            resolver.resolve("hello world")
        assert session.requests == []

    @pytest.mark.parametrize("response, error", [
        (FakeResponse(404, {"message": "Verse not found in database"}), NotFoundError),
        (FakeResponse(400, {"message": "Invalid verse reference format"}), ValidationError),
        (FakeResponse(500, None, text="boom"), NetworkError),
        (FakeResponse(200, None, text="<html>"), NetworkError),
        (FakeResponse(200, ["not", "a", "dict"]), NetworkError),
        (FakeResponse(200, {"verse": {"text": ""}}), NotFoundError),
    ])
    def test_error_responses(self, response, error):
        resolver = LookupAPIResolver(api_config(), session=FakeSession(response))

        with pytest.raises(error):
            resolver.resolve("John 3:16")

    def test_error_message_from_payload(self):
        response = FakeResponse(404, {"message": "Verse not found in database"})
        resolver = LookupAPIResolver(api_config(), session=FakeSession(response))

        with pytest.raises(NotFoundError, match="Verse not found in database"):
            resolver.resolve("John 3:16")

    def test_connection_error(self):
        session = FakeSession(error=requests.exceptions.ConnectionError("refused"))
        resolver = LookupAPIResolver(api_config(), session=session)

        with pytest.raises(NetworkError):
            resolver.resolve("John 3:16")

    def test_placeholder_text_rejected(self):
        response = FakeResponse(200, {"text": "[John 3:16 text for KJV]"})
        resolver = LookupAPIResolver(api_config(), session=FakeSession(response))

        with pytest.raises(NotFoundError):
            resolver.resolve("John 3:16")

    def test_placeholder_text_allowed_when_disabled(self):
        response = FakeResponse(200, {"text": "[John 3:16 text for KJV]"})
        resolver = LookupAPIResolver(api_config(reject_placeholders=False), session=FakeSession(response))

        assert resolver.resolve("John 3:16").resolved_text == "[John 3:16 text for KJV]"

    def test_short_real_verse_accepted(self):
        response = FakeResponse(200, {"text": "Jesus wept."})
        resolver = LookupAPIResolver(api_config(), session=FakeSession(response))

        assert resolver.resolve("John 11:35").resolved_text == "Jesus wept."


class TestBollsResolver:
    """Test the bolls.life resolver."""

    def config(self):
        return Config(resolver="bolls", translation="ESV", enable_rate_limiting=False)

    def test_single_verse(self):
        session = FakeSession(FakeResponse(200, {"pk": 1, "verse": 16, "text": "For God<S>3588</S> so loved"}))
        resolver = BollsResolver(self.config(), session=session)

        result = resolver.resolve("john 3:16")

        assert result.resolved_text == "For God so loved"
        assert result.display_reference == "John 3:16"
        assert result.translation == "ESV"
        method, url, _ = session.requests[0]
        assert (method, url) == ("GET", "https://bolls.life/get-verse/ESV/43/3/16/")

    def test_range_uses_bulk_endpoint(self):
        payload = [[{"verse": 4, "text": "Love is patient"}, {"verse": 5, "text": "it is not rude<sup>a</sup>"}]]
        session = FakeSession(FakeResponse(200, payload))
        resolver = BollsResolver(self.config(), session=session)

        result = resolver.resolve("1 Cor 13:4-5")

        assert result.resolved_text == "Love is patient it is not rude"
        assert result.display_reference == "1 Corinthians 13:4-5"
        method, url, kwargs = session.requests[0]
        assert (method, url) == ("POST", "https://bolls.life/get-verses/")
        assert kwargs["json"] == [{"translation": "ESV", "book": 46, "chapter": 13, "verses": [4, 5]}]

    def test_unknown_book(self):
        session = FakeSession(FakeResponse(200, {"text": "x"}))

        with pytest.raises(NotFoundError):
            BollsResolver(self.config(), session=session).resolve("Hezekiah 1:1")
        assert session.requests == []

    @pytest.mark.parametrize("response, error", [
        (FakeResponse(404, {"detail": "Not found"}), NotFoundError),
        (FakeResponse(503, None, text="unavailable"), NetworkError),
        (FakeResponse(200, None, text="<html>"), NetworkError),
        (FakeResponse(200, {}), NotFoundError),
    ])
    def test_error_responses(self, response, error):
        resolver = BollsResolver(self.config(), session=FakeSession(response))

        with pytest.raises(error):
            resolver.resolve("John 3:16")

    def test_timeout_is_network_error(self):
        session = FakeSession(error=requests.exceptions.Timeout("slow"))

        with pytest.raises(NetworkError):
            BollsResolver(self.config(), session=session).resolve("John 3:16")


@pytest.mark.parametrize("book, expected", [
    ("John", ("John", 43)),
    ("1 Cor", ("1 Corinthians", 46)),
    ("psalm", ("Psalms", 19)),
    ("Song of Songs", ("Song of Solomon", 22)),
    ("Acts of the Apostles", ("Acts", 44)),
    ("2 kgs", ("2 Kings", 12)),
    ("Rev", ("Revelation", 66)),
    ("Hezekiah", None),
])
def test_lookup_book(book, expected):
    assert lookup_book(book) == expected


def test_clean_verse_html():
    assert clean_verse_html("In <i>the</i>  beginning<S>7225</S>") == "In the beginning"


def test_is_placeholder_text():
    assert is_placeholder_text("Scripture from Genesis 1:1")
    assert not is_placeholder_text("In the beginning God created the heaven and the earth.")


class TestBuildResolver:
    """Test resolver selection from configuration."""

    def test_static_default(self):
        assert isinstance(build_resolver(Config()), StaticResolver)

    def test_static_with_file(self, tmp_path):
        path = tmp_path / "verses.json"
        path.write_text(json.dumps({"John 3:16": "x"}), encoding="utf-8")

        resolver = build_resolver(Config(verses_file=str(path)))

        assert len(resolver) == 1

    def test_named_resolvers(self):
        assert isinstance(build_resolver(api_config()), LookupAPIResolver)
        assert isinstance(build_resolver(Config(resolver="bolls")), BollsResolver)

    def test_unknown(self):
        with pytest.raises(ConfigurationError):
            build_resolver(Config(resolver="carrier-pigeon"))
