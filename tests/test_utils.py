"""Unit tests for stribor.utils module."""

import pytest
from pathlib import PurePosixPath

from stribor.errors import MalformedURLError
from stribor.utils import bookmark_filename, bookmark_relpath, die, parse_url, slugify, warn


class TestSlugify:
    """Test slugify function."""

    def test_basic(self):
        """Should lowercase and dash-join."""
        assert slugify("Hello World") == "hello-world"

    def test_path_separators(self):
        """Should never keep slashes."""
        assert slugify("/foo/bar/") == "foo-bar"
        assert slugify("a\\b") == "a-b"

    def test_collapse(self):
        """Should collapse runs of unsafe characters."""
        assert slugify("foo--bar..baz") == "foo-bar-baz"

    def test_unicode(self):
        """Should fold accents to ASCII."""
        assert slugify("/café/crème") == "cafe-creme"

    def test_transliterates_non_latin(self):
        """Should spell out Cyrillic and CJK instead of dropping them."""
        assert slugify("/привет") == "privet"
        assert slugify("/中文")

    def test_keeps_underscore(self):
        """Underscores survive, edge ones are trimmed."""
        assert slugify("/foo_bar/") == "foo_bar"
        assert slugify("_x_") == "x"

    def test_empty(self):
        """Should return empty string for separator-only input."""
        assert slugify("/") == ""

    def test_deterministic(self):
        """Same input, same output."""
        assert slugify("/A/b.html") == slugify("/A/b.html") == "a-b-html"


class TestBookmarkFilename:
    """Test bookmark_filename function."""

    def test_root(self):
        """Should use root for empty or slash-only paths."""
        assert bookmark_filename("") == "root.yaml"
        assert bookmark_filename("/") == "root.yaml"

    def test_path(self):
        """Should slug the path."""
        assert bookmark_filename("/foo") == "foo.yaml"


class TestParseUrl:
    """Test parse_url function."""

    def test_basic(self):
        """Should split scheme, host and path."""
        p = parse_url("http://example.com/foo")
        assert p.url == "http://example.com/foo"
        assert p.scheme == "http"
        assert p.host == "example.com"
        assert p.path == "/foo"

    def test_strips_whitespace(self):
        """Should ignore surrounding blanks."""
        assert parse_url("  https://example.com  ").url == "https://example.com"

    def test_host_lowercase_and_userinfo(self):
        """Host folder drops user info and case."""
        p = parse_url("https://bob:pw@Example.COM:8080/x")
        assert p.host == "example.com:8080"

    def test_path_is_decoded(self):
        """Percent escapes are decoded for the path but kept in the url."""
        p = parse_url("http://example.com/caf%C3%A9")
        assert p.path == "/café"
        assert p.url == "http://example.com/caf%C3%A9"

    def test_keeps_query(self):
        """Canonical url keeps the query string."""
        assert parse_url("https://example.com/s?q=1").url == "https://example.com/s?q=1"

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", "example.com/foo", "/just/a/path", "http://[::1/x", "http://ex ample.com", "http://..", "http://example.com:99999"],
    )
    def test_malformed(self, raw):
        """Should reject unparsable or relative urls."""
        with pytest.raises(MalformedURLError):
            parse_url(raw)


class TestBookmarkRelpath:
    """Test bookmark_relpath function."""

    def test_relpath(self):
        """Should be host/slug.yaml."""
        assert bookmark_relpath(parse_url("http://example.com/foo")) == PurePosixPath(
            "example.com/foo.yaml"
        )

    def test_encoded_and_plain_path_share_file(self):
        """An escaped path and its decoded form are the same bookmark."""
        a = bookmark_relpath(parse_url("http://example.com/caf%C3%A9"))
        b = bookmark_relpath(parse_url("http://example.com/café"))
        assert a == b == PurePosixPath("example.com/cafe.yaml")

    def test_non_latin_path_not_root(self):
        """A Cyrillic path must not fall back to root.yaml."""
        rel = bookmark_relpath(parse_url("http://example.com/привет"))
        assert rel == PurePosixPath("example.com/privet.yaml")

    def test_same_host_path_collide(self):
        """Query and fragment do not change the location."""
        a = bookmark_relpath(parse_url("http://example.com/foo?x=1"))
        b = bookmark_relpath(parse_url("https://example.com/foo#top"))
        assert a == b


class TestDie:
    """Test die and warn."""

    def test_die(self, capsys):
        """Should exit with the given code."""
        with pytest.raises(SystemExit) as exc:
            die("boom", code=2)
        assert exc.value.code == 2
        assert capsys.readouterr().err == "stribor: boom\n"

    def test_warn(self, capsys):
        """Should print to stderr."""
        warn("careful")
        assert capsys.readouterr().err == "stribor: warning: careful\n"
