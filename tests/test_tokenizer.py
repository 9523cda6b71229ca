"""Tests for the statement tokenizer."""

import pytest

from tripledger.utils.tokenizer import (
    COMMA,
    EMPTY_FILE,
    NO_VALID_ROWS,
    SEMICOLON,
    TAB,
    TOO_FEW_LINES,
    clean_headers,
    detect_delimiter,
    split_line,
    tokenize,
)


class TestDetectDelimiter:
    """Tests for delimiter detection from the header line."""

    def test_comma(self):
        assert detect_delimiter("Date,Description,Amount") == COMMA

    def test_tab(self):
        assert detect_delimiter("Date\tDescription\tAmount") == TAB

    def test_semicolon_beats_comma_only_when_more_frequent(self):
        assert detect_delimiter("Date;Description;Amount") == SEMICOLON
        assert detect_delimiter("a;b,c") == COMMA

    def test_tab_wins_ties(self):
        """A line with no separators at all counts as tab separated."""
        assert detect_delimiter("Date") == TAB
        assert detect_delimiter("a\tb,c") == TAB


class TestSplitLine:
    """Tests for splitting one line into cells."""

    def test_quoted_comma_stays_in_cell(self):
        assert split_line('15/01/2025,"EFLOW, TOLL",-3.20', COMMA) == [
            "15/01/2025",
            "EFLOW, TOLL",
            "-3.20",
        ]

    def test_doubled_quote_is_literal(self):
        assert split_line('"say ""hi""",1', COMMA) == ['say "hi"', "1"]

    def test_quoted_name_with_comma_and_quotes(self):
        assert split_line('"John, ""Jr.""",100,2024-01-01', COMMA) == [
            'John, "Jr."',
            "100",
            "2024-01-01",
        ]

    def test_cells_are_trimmed(self):
        assert split_line(" a ;  b ", SEMICOLON) == ["a", "b"]

    def test_tab_cells_lose_one_layer_of_quotes(self):
        assert split_line('"a"\t"b, c"\t', TAB) == ["a", "b, c", ""]


class TestCleanHeaders:
    """Tests for header cleanup."""

    def test_blank_headers_are_named_by_position(self):
        assert clean_headers(["Date", "", "Amount", " "]) == [
            "Date",
            "Column 2",
            "Amount",
            "Column 4",
        ]

    def test_duplicate_headers_get_suffix(self):
        assert clean_headers(["Amount", "Amount", "Amount"]) == [
            "Amount",
            "Amount (2)",
            "Amount (3)",
        ]

    def test_suffix_skips_names_already_in_the_file(self):
        assert clean_headers(["Amount", "Amount", "Amount (2)"]) == [
            "Amount",
            "Amount (2)",
            "Amount (2) (2)",
        ]
        assert clean_headers(["Amount (2)", "Amount", "Amount"]) == [
            "Amount (2)",
            "Amount",
            "Amount (3)",
        ]

    def test_blank_header_name_clashing_with_real_one(self):
        assert clean_headers(["Column 2", ""]) == ["Column 2", "Column 2 (2)"]


class TestTokenize:
    """Tests for tokenizing whole files."""

    def test_mixed_line_endings(self):
        text = "Date,Description,Amount\r\n01/01/2025,A,1\r02/01/2025,B,2\n03/01/2025,C,3"
        table = tokenize(text)
        assert table.headers == ["Date", "Description", "Amount"]
        assert len(table.rows) == 3
        assert table.delimiter == COMMA

    def test_rows_with_fewer_than_two_values_are_dropped(self):
        text = "Date,Description,Amount\n01/01/2025,A,1\nTotal,,\n,,\n"
        table = tokenize(text)
        assert table.rows == [["01/01/2025", "A", "1"]]
        assert table.total_rows == 3
        assert table.dropped_rows == 2

    def test_blank_lines_are_ignored(self):
        table = tokenize("Date,Description\n\n\n01/01/2025,A\n\n")
        assert table.total_rows == 1

    def test_column_counts(self):
        table = tokenize("a,b,c\n1,2,3\n1,2\n4,5,6")
        assert table.column_counts == {3: 2, 2: 1}

    def test_byte_order_mark_is_removed(self):
        table = tokenize("\ufeffDate,Description,Amount\n01/01/2025,A,1")
        assert table.headers == ["Date", "Description", "Amount"]

    def test_empty_file(self):
        with pytest.raises(ValueError, match=EMPTY_FILE):
            tokenize("   \n ")

    def test_header_only(self):
        with pytest.raises(ValueError, match=TOO_FEW_LINES):
            tokenize("Date,Description,Amount\n")

    def test_no_usable_rows(self):
        with pytest.raises(ValueError, match=NO_VALID_ROWS):
            tokenize("Date,Description,Amount\nonly,,\n")

    def test_semicolon_file_from_fixture(self, fixtures_dir):
        table = tokenize((fixtures_dir / "semicolon_statement.csv").read_text())
        assert table.delimiter == SEMICOLON
        assert table.rows[0] == ["03/02/2025", "APPLEGREEN ATHLONE", "-1.234,56"]
