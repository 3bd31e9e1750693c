import pytest

from config import _optional_float, parse_url_rewrites


class TestParseUrlRewrites:
    def test_empty(self):
        assert parse_url_rewrites("") == []
        assert parse_url_rewrites(" , ") == []

    def test_longest_prefix_first(self):
        rewrites = parse_url_rewrites(
            "https://getalby.com/=http://10.0.0.1:8080/, https://getalby.com/.well-known/=http://10.0.0.2/"
        )

        assert rewrites == [
            ("https://getalby.com/.well-known/", "http://10.0.0.2/"),
            ("https://getalby.com/", "http://10.0.0.1:8080/"),
        ]

    def test_replacement_may_contain_equals(self):
        assert parse_url_rewrites("https://a.example/=http://b.example/?x=1") == [
            ("https://a.example/", "http://b.example/?x=1"),
        ]

    def test_missing_separator(self):
        with pytest.raises(ValueError, match="prefix=replacement"):
            parse_url_rewrites("https://getalby.com/")

    def test_empty_prefix(self):
        with pytest.raises(ValueError, match="Empty prefix"):
            parse_url_rewrites("=http://10.0.0.1/")


class TestOptionalFloat:
    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("SHUTDOWN_TIMEOUT", raising=False)

        assert _optional_float("SHUTDOWN_TIMEOUT", 10.0) == 10.0
        assert _optional_float("SHUTDOWN_TIMEOUT") is None

    def test_explicit_zero_is_kept(self, monkeypatch):
        monkeypatch.setenv("SHUTDOWN_TIMEOUT", "0")

        assert _optional_float("SHUTDOWN_TIMEOUT", 10.0) == 0.0

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("FETCH_TIMEOUT", "soon")

        with pytest.raises(ValueError, match="Invalid FETCH_TIMEOUT"):
            _optional_float("FETCH_TIMEOUT")
