"""Tests for the rescan gate."""
from versefill.core.change_detector import should_rescan


class TestShouldRescan:
    """Test when typing triggers a rescan."""

    def test_growth_rescans(self):
        assert should_rescan("Read John 3:1", "Read John 3:16")

    def test_first_input_rescans(self):
        assert should_rescan("", "John 3:16")

    def test_deletion_does_not_rescan(self):
        assert not should_rescan("Read John 3:16", "Read John 3:1")

    def test_same_length_does_not_rescan(self):
        assert not should_rescan("John 3:16", "John 3:17")

    def test_own_splice_does_not_rescan(self):
        """Test the splicer's output is not treated as typed input."""
        spliced = 'Read John 3:16 - "For God so loved..."'
        assert not should_rescan("Read John 3:16", spliced, spliced)

    def test_typing_after_splice_rescans(self):
        """Test only the exact spliced text is suppressed."""
        spliced = 'Read John 3:16 - "For God so loved..."'
        assert should_rescan(spliced, spliced + " and Romans 8:28", spliced)

    def test_boolean_flag_suppresses(self):
        assert not should_rescan("a", "ab", True)
        assert should_rescan("a", "ab", False)

    def test_none_text(self):
        assert should_rescan(None, "John 3:16")
        assert not should_rescan("John 3:16", None)
