"""Tests for path parsing, segment linking and the compiled-path cache."""

from __future__ import annotations

import dataclasses

import pytest

from json_element.path import JsonPath, PathCache, Segment, as_path

# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParse:
    """JsonPath.parse() splits text into flagged segments."""

    def test_splits_on_dots(self) -> None:
        """Dots separate segment names."""
        path = JsonPath.parse("users.0.name")
        assert [segment.name for segment in path] == ["users", "0", "name"]
        assert len(path) == 3

    def test_single_segment(self) -> None:
        """A name without dots is one terminal segment."""
        path = JsonPath.parse("a")
        assert path.head.name == "a"
        assert path.head.is_terminal

    def test_empty_string_names_the_empty_key(self) -> None:
        """The empty path addresses the empty key."""
        path = JsonPath.parse("")
        assert [segment.name for segment in path] == [""]

    def test_empty_parts_are_kept(self) -> None:
        """Consecutive dots produce an empty name between them."""
        assert [segment.name for segment in JsonPath.parse("a..b")] == ["a", "", "b"]

    @pytest.mark.parametrize(
        ("source", "optional", "lenient"),
        [("a", False, False), ("a?", True, False), ("a??", True, True)],
    )
    def test_flags(self, source: str, optional: bool, lenient: bool) -> None:
        """One trailing mark is optional, two are lenient."""
        segment = JsonPath.parse(source).head
        assert segment.name == "a"
        assert segment.optional is optional
        assert segment.lenient is lenient

    def test_extra_question_marks_belong_to_the_name(self) -> None:
        """Only the last two marks are flags."""
        segment = JsonPath.parse("a???").head
        assert segment.name == "a?"
        assert segment.lenient

    def test_question_mark_inside_name_is_literal(self) -> None:
        """A mark that is not trailing is part of the name."""
        segment = JsonPath.parse("a?b").head
        assert segment.name == "a?b"
        assert not segment.optional

    def test_flags_per_segment(self) -> None:
        """Each segment carries its own flags."""
        path = JsonPath.parse("a?.b.c??")
        assert [(s.optional, s.lenient) for s in path] == [
            (True, False),
            (False, False),
            (True, True),
        ]

    @pytest.mark.parametrize(
        ("source", "names"),
        [
            (r"a\.b", ["a.b"]),
            (r"a\?", ["a?"]),
            (r"a\\.b", ["a\\", "b"]),
            (r"x\??", ["x?"]),
        ],
    )
    def test_escapes(self, source: str, names: list[str]) -> None:
        """Backslash escapes dots, marks and itself."""
        assert [segment.name for segment in JsonPath.parse(source)] == names

    def test_escaped_question_mark_before_flag(self) -> None:
        """An escaped mark does not count toward the flags."""
        segment = JsonPath.parse(r"x\??").head
        assert segment.optional
        assert not segment.lenient

    def test_rejects_non_str(self) -> None:
        """Only text can be parsed."""
        with pytest.raises(TypeError):
            JsonPath.parse(1)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Construction and linking
# ---------------------------------------------------------------------------


class TestLinks:
    """Segments are linked to their neighbours within one path."""

    def test_segments_are_doubly_linked(self) -> None:
        """prev and next walk the path in both directions."""
        first, second, third = JsonPath.parse("a.b.c").segments
        assert first.prev is None
        assert first.next is second
        assert second.prev is first
        assert second.next is third
        assert third.next is None
        assert third.is_terminal

    def test_constructor_copies_segments(self) -> None:
        """Sharing a Segment between paths does not tangle their links."""
        shared = Segment("x", optional=True)
        left = JsonPath([shared, Segment("a")])
        right = JsonPath([Segment("b"), shared])
        assert shared.next is None
        assert left.head.next is not None
        assert right.segments[1].prev is right.head

    def test_empty_path_rejected(self) -> None:
        """A path needs at least one segment."""
        with pytest.raises(ValueError, match="at least one segment"):
            JsonPath([])

    def test_of_builds_strict_raw_names(self) -> None:
        """of() takes names verbatim with no flags."""
        path = JsonPath.of("a.b", "c?")
        assert [segment.name for segment in path] == ["a.b", "c?"]
        assert not any(segment.optional for segment in path)

    def test_segment_is_frozen(self) -> None:
        """Segments are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            JsonPath.parse("a").head.name = "b"  # type: ignore[misc]

    def test_segment_name_must_be_str(self) -> None:
        """Segment names are validated."""
        with pytest.raises(TypeError):
            Segment(1)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Rendering and equality
# ---------------------------------------------------------------------------


class TestRendering:
    """str(), repr() and equality of compiled paths."""

    @pytest.mark.parametrize("source", ["a.b", "a?.b??.c", r"a\.b.c\?", "0.1"])
    def test_str_round_trips(self, source: str) -> None:
        """str() reproduces the parsed text."""
        assert str(JsonPath.parse(source)) == source

    def test_of_escapes_when_rendered(self) -> None:
        """Raw names are escaped on output."""
        assert str(JsonPath.of("a.b")) == r"a\.b"

    def test_lenient_only_segment_renders_double_mark(self) -> None:
        """Lenient implies optional when rendered."""
        assert str(JsonPath([Segment("a", lenient=True)])) == "a??"

    def test_prefix(self) -> None:
        """prefix() renders the path up to and including a segment."""
        path = JsonPath.parse("a?.b.c")
        assert path.segments[1].prefix() == "a?.b"
        assert path.head.prefix() == "a?"

    def test_repr(self) -> None:
        """repr() shows the rendered text."""
        assert repr(JsonPath.parse("a.b")) == "JsonPath('a.b')"

    def test_equality_and_hash(self) -> None:
        """Paths compare by names and flags."""
        assert JsonPath.parse("a.b?") == JsonPath([Segment("a"), Segment("b", True)])
        assert JsonPath.parse("a.b") != JsonPath.parse("a.b?")
        assert hash(JsonPath.parse("a.b")) == hash(JsonPath.of("a", "b"))


# ---------------------------------------------------------------------------
# PathCache
# ---------------------------------------------------------------------------


class TestPathCache:
    """PathCache memoizes compiled paths with LRU eviction."""

    def test_returns_same_compiled_path(self) -> None:
        """A repeated compile is a cache hit."""
        cache = PathCache()
        assert cache.compile("a.b") is cache.compile("a.b")
        assert cache.curr_size == 1

    def test_properties(self) -> None:
        """max_size and curr_size report the cache state."""
        cache = PathCache(max_size=10)
        assert cache.max_size == 10
        assert cache.curr_size == 0

    def test_lru_eviction(self) -> None:
        """The least recently used entry is evicted first."""
        cache = PathCache(max_size=2)
        first = cache.compile("a")
        cache.compile("b")
        cache.compile("a")
        cache.compile("c")
        assert cache.curr_size == 2
        assert cache.compile("a") is first
        assert cache.curr_size == 2

    def test_instances_are_isolated(self) -> None:
        """Caches do not share entries."""
        left, right = PathCache(), PathCache()
        left.compile("a")
        assert right.curr_size == 0

    def test_clear(self) -> None:
        """clear() drops every entry."""
        cache = PathCache()
        cache.compile("a")
        cache.clear()
        assert cache.curr_size == 0

    def test_miss_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Only misses emit a DEBUG record."""
        cache = PathCache()
        with caplog.at_level("DEBUG", logger="json_element.path"):
            cache.compile("x.y")
            cache.compile("x.y")
        misses = [r for r in caplog.records if "path cache miss" in r.getMessage()]
        assert len(misses) == 1


class TestAsPath:
    """as_path() normalizes path arguments."""

    def test_passes_compiled_paths_through(self) -> None:
        """A JsonPath is returned unchanged."""
        path = JsonPath.parse("a")
        assert as_path(path) is path

    def test_compiles_strings(self) -> None:
        """Text is compiled."""
        assert as_path("a.b") == JsonPath.of("a", "b")

    def test_rejects_other_types(self) -> None:
        """Anything else is a TypeError."""
        with pytest.raises(TypeError, match="JsonPath or str"):
            as_path(["a"])  # type: ignore[arg-type]
