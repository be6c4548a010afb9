"""Tests for the byte-span rewrite engine."""

import pytest

from core.errors import OverlappingEditError
from core.models import Edit, Span
from core.rewrite import apply_edits


class TestApplyEdits:
    """Test applying edits against the original buffer."""

    def test_no_edits_returns_source(self):
        """Should return the source unchanged when there is nothing to do."""
        assert apply_edits("gem 'foo'\n", []) == "gem 'foo'\n"

    def test_single_replacement(self):
        """Should replace exactly the edited span."""
        source = 'gem "foo", "~> 1.0"'
        edit = Edit.replace(Span(11, 19), "'>= 1.5'")
        assert apply_edits(source, [edit]) == "gem \"foo\", '>= 1.5'"

    def test_removal(self):
        """Should delete the span for an empty replacement."""
        source = 'add_dependency "foo", "~> 1.0"'
        assert apply_edits(source, [Edit.remove(Span(20, 30))]) == 'add_dependency "foo"'

    def test_edits_applied_against_original_offsets(self):
        """Offsets refer to the original buffer regardless of edit order."""
        source = "aaa bbb ccc"
        edits = [
            Edit.replace(Span(8, 11), "CCCCC"),
            Edit.replace(Span(0, 3), "A"),
        ]
        assert apply_edits(source, edits) == "A bbb CCCCC"

    def test_touching_edits_are_allowed(self):
        """Adjacent spans don't overlap."""
        source = "abcdef"
        edits = [Edit.remove(Span(0, 3)), Edit.replace(Span(3, 6), "X")]
        assert apply_edits(source, edits) == "X"

    def test_insertion(self):
        """A zero-length span inserts text."""
        assert apply_edits("ab", [Edit.replace(Span(1, 1), "-")]) == "a-b"

    def test_overlapping_edits_fail(self):
        """Should refuse to apply intersecting edits."""
        edits = [Edit.remove(Span(0, 4)), Edit.replace(Span(2, 6), "x")]
        with pytest.raises(OverlappingEditError):
            apply_edits("abcdefgh", edits)

    def test_span_past_end_fails(self):
        """Should reject a span outside the buffer."""
        with pytest.raises(ValueError):
            apply_edits("abc", [Edit.remove(Span(1, 10))])

    def test_offsets_are_utf8_bytes(self):
        """Multi-byte characters before an edit shift byte, not char, offsets."""
        source = "# café\ngem 'x'"
        start = len("# café\ngem ".encode("utf-8"))
        edit = Edit.replace(Span(start, start + 3), "'y'")
        assert apply_edits(source, [edit]) == "# café\ngem 'y'"

    def test_bytes_outside_edits_preserved(self):
        """Everything outside the edit spans is copied verbatim."""
        source = "keep  \t me\r\n" + "x" * 5 + "\n# tail"
        edit = Edit.replace(Span(12, 17), "y")
        result = apply_edits(source, [edit])
        assert result.startswith("keep  \t me\r\n")
        assert result.endswith("y\n# tail")


class TestSpan:
    """Test span helpers."""

    def test_join(self):
        assert Span(4, 6).join(Span(1, 2)) == Span(1, 6)

    def test_overlaps(self):
        assert Span(0, 4).overlaps(Span(3, 5))
        assert not Span(0, 4).overlaps(Span(4, 5))

    def test_invalid_span(self):
        with pytest.raises(ValueError):
            Span(5, 2)
