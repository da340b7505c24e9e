#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the structural vet scanner."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdtool.vet import Fault, FaultType, check_code_fences, check_links, resolve_locations, vet


def reasons(source) -> list[FaultType]:
    return [fault.reason for fault in vet(source)]


@pytest.mark.unit
class TestCodeFences:
    """Test runaway code fence detection."""

    @pytest.mark.parametrize(
        "source",
        [
            "",
            "```\ncode\n```\n",
            "text with ``` inside a line\n",
            "```python\na\n```\n\n```\nb\n```\n",
        ],
    )
    def test_balanced(self, source):
        """Test documents whose fences are balanced."""
        assert reasons(source) == []

    def test_runaway_fence(self):
        """Test that an unclosed fence is exactly one fault."""
        assert reasons("```\ncode\n") == [FaultType.RUNAWAY_CODE_FENCE]

    def test_runaway_fault_at_last_fence(self):
        """Test that the fault points at the fence that never closes."""
        source = "something\n```bash\ncode\n```\nsomething\n```\ncode\n"
        faults = vet(source)
        assert [f.reason for f in faults] == [FaultType.RUNAWAY_CODE_FENCE]
        assert faults[0].offset == source.rindex("```")
        assert faults[0].row == 6
        assert faults[0].column == 0

    def test_fence_not_at_line_start_ignored(self):
        """Test that a marker in the middle of a line does not count."""
        assert check_code_fences(b"a ```\n") == []

    def test_four_backticks_count_once(self):
        """Test that a longer fence is still a single marker."""
        assert check_code_fences(b"````\ncode\n````\n") == []


@pytest.mark.unit
class TestLinks:
    """Test inline link syntax checks."""

    def test_well_formed_link(self):
        """Test that a normal link is clean."""
        assert reasons("[text](http://x/)") == []

    def test_space_between_text_and_url(self):
        """Test whitespace between ] and (."""
        assert reasons("[text] (http://x/)") == [FaultType.LINK_SPACE_BETWEEN_TEXT_AND_LINK]

    def test_tab_between_text_and_url(self):
        """Test that a tab counts as inline whitespace."""
        assert reasons("[text]\t(http://x/)") == [FaultType.LINK_SPACE_BETWEEN_TEXT_AND_LINK]

    def test_blank_line_in_text(self):
        """Test link text spanning a blank line."""
        assert reasons("[a\n\nb](http://x/)") == [FaultType.LINK_TEXT_WHITESPACE]

    def test_single_newline_in_text_allowed(self):
        """Test that a wrapped link text is fine."""
        assert reasons("[a\nb](http://x/)") == []

    def test_newline_in_url(self):
        """Test a destination broken across lines."""
        assert reasons("[line1](http://golang.\n\norg/)") == [FaultType.LINK_URL_WHITESPACE]

    def test_runaway_text(self):
        """Test an opening bracket that never closes."""
        assert reasons("[text\n\n") == [FaultType.RUNAWAY_LINK_TEXT]

    def test_runaway_url(self):
        """Test a destination that never closes."""
        assert reasons("[text](http://golang.org/") == [FaultType.RUNAWAY_LINK_URL]

    def test_brackets_without_paren_are_text(self):
        """Test that bracket text not followed by ( is never a fault."""
        assert reasons("[x] and [y]\n\n[ ] todo\n") == []

    def test_brackets_at_end_of_input(self):
        """Test that trailing spaces after ] at end of input are not a fault."""
        assert reasons("see [note]   ") == []

    def test_scan_resumes_after_plain_brackets(self):
        """Test that a fault after ordinary bracket text is still found."""
        source = "[plain] text [link] (http://x/)"
        faults = vet(source)
        assert [f.reason for f in faults] == [FaultType.LINK_SPACE_BETWEEN_TEXT_AND_LINK]
        assert faults[0].offset == source.index("[link]")

    def test_multiple_faults_for_one_link(self):
        """Test that one link can carry several faults, all at its [."""
        faults = check_links(b"[a\n\nb] (u\nrl)")
        assert [f.reason for f in faults] == [
            FaultType.LINK_SPACE_BETWEEN_TEXT_AND_LINK,
            FaultType.LINK_TEXT_WHITESPACE,
            FaultType.LINK_URL_WHITESPACE,
        ]
        assert {f.offset for f in faults} == {0}


@pytest.mark.unit
class TestLocations:
    """Test row, column and line resolution."""

    def test_row_and_column(self):
        """Test that rows are 1-based and columns are byte offsets within the line."""
        source = "first line\nsecond [x] (y)\n"
        fault = vet(source)[0]
        assert fault.row == 2
        assert fault.column == len("second ")
        assert fault.line == "second [x] (y)"

    def test_columns_are_bytes(self):
        """Test that multi-byte characters count by their UTF-8 length."""
        source = "é [x] (y)"
        assert vet(source)[0].column == len("é ".encode("utf-8"))

    def test_crlf_line_text(self):
        """Test that the carriage return is not part of the line text."""
        fault = vet(b"[x] (y)\r\nnext\r\n")[0]
        assert fault.line == "[x] (y)"

    def test_offset_on_newline_belongs_to_its_line(self):
        """Test that a newline offset resolves to the line it ends."""
        raw = b"ab\ncd"
        fault = resolve_locations(raw, [Fault(2, FaultType.RUNAWAY_LINK_TEXT)])[0]
        assert (fault.row, fault.column, fault.line) == (1, 2, "ab")

    def test_unsorted_faults_rejected(self):
        """Test that locations can only be resolved for sorted faults."""
        faults = [Fault(5, FaultType.RUNAWAY_LINK_TEXT), Fault(1, FaultType.RUNAWAY_LINK_URL)]
        with pytest.raises(ValueError):
            resolve_locations(b"0123456789", faults)


@pytest.mark.unit
class TestVetApi:
    """Test the vet entry point and Fault records."""

    def test_sorted_across_checks(self):
        """Test that faults from different checks are merged in offset order."""
        source = "```\n[a] (b)\n"
        faults = vet(source)
        assert [f.reason for f in faults] == [FaultType.RUNAWAY_CODE_FENCE, FaultType.LINK_SPACE_BETWEEN_TEXT_AND_LINK]
        assert faults[0].offset < faults[1].offset

    def test_custom_checks(self):
        """Test running a subset of the checks."""
        assert vet("```\n[a] (b)\n", checks=[check_links])[0].reason is FaultType.LINK_SPACE_BETWEEN_TEXT_AND_LINK

    def test_str_and_bytes_agree(self):
        """Test that str input is scanned as its UTF-8 bytes."""
        source = "ü [a] (b)\n```\n"
        assert vet(source) == vet(source.encode("utf-8"))

    def test_unsupported_type(self):
        """Test that other input types are rejected."""
        with pytest.raises(TypeError):
            vet(42)  # type: ignore[arg-type]

    def test_fault_type_values_and_descriptions(self):
        """Test the stable numbering and readable names of fault kinds."""
        assert int(FaultType.RUNAWAY_CODE_FENCE) == 1
        assert int(FaultType.LINK_SPACE_BETWEEN_TEXT_AND_LINK) == 6
        assert str(FaultType.RUNAWAY_CODE_FENCE) == "Runaway Code Fence"
        assert str(FaultType.LINK_SPACE_BETWEEN_TEXT_AND_LINK) == "Whitespace between Link Text and Link URL"

    def test_fault_to_dict(self):
        """Test the serializable form of a fault."""
        fault = vet("[a] (b)")[0]
        assert fault.to_dict() == {
            "offset": 0,
            "row": 1,
            "column": 0,
            "reason": "Whitespace between Link Text and Link URL",
            "code": "LINK_SPACE_BETWEEN_TEXT_AND_LINK",
            "line": "[a] (b)",
        }


@pytest.mark.unit
@pytest.mark.fuzzing
class TestVetProperties:
    """Property-based tests for the scanner."""

    @given(st.binary(max_size=300))
    def test_arbitrary_bytes_never_crash(self, raw):
        """Test that any byte string scans without error and faults are sorted."""
        faults = vet(raw)
        offsets = [fault.offset for fault in faults]
        assert offsets == sorted(offsets)
        for fault in faults:
            assert 0 <= fault.offset < len(raw)
            assert fault.row >= 1
            assert fault.column >= 0

    @given(st.text(alphabet="[]() \n`ab", max_size=200))
    def test_markdown_like_text(self, text):
        """Test that faults in bracket-heavy text are sorted and located on their line."""
        raw = text.encode("utf-8")
        faults = vet(raw)
        assert [f.offset for f in faults] == sorted(f.offset for f in faults)
        for fault in faults:
            line_start = raw.rfind(b"\n", 0, fault.offset) + 1
            assert fault.column == fault.offset - line_start
            assert fault.row == raw.count(b"\n", 0, fault.offset) + 1

    @given(st.text(alphabet="ab \n", max_size=100))
    def test_text_without_markers_is_clean(self, text):
        """Test that text with no brackets or backticks never has faults."""
        assert vet(text) == []
