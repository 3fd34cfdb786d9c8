#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the block scanner and block header parser

Covers delimiter recognition, pairing, line tables for LF and CRLF
files, and decoding of ASCII and binary header lines.
"""

from __future__ import annotations

import pytest

from pyunv.exceptions import FileFormatError, ParseError
from pyunv.readers.scanner import BlockRange, parse_block_header, scan_blocks


def _binary_header(code: int, byte_order: int, n_bytes: int) -> str:
    return f"{code:6d}b{byte_order:6d}{2:6d}{11:12d}{n_bytes:12d}{0:6d}{0:6d}{0:12d}{0:12d}"


# -----------------------------------------------------------------------
# scan_blocks
# -----------------------------------------------------------------------

class TestScanBlocks:
    """Test delimiter detection and pairing"""

    def test_single_block(self, header_block) -> None:
        blocks = scan_blocks(header_block)
        assert len(blocks) == 1
        assert blocks[0].number == 1
        assert blocks[0].start == 0
        assert header_block[blocks[0].end :].startswith(b"    -1")

    def test_two_blocks_numbered_in_order(self, header_block, nodes_block) -> None:
        blocks = scan_blocks(header_block + nodes_block)
        assert [b.number for b in blocks] == [1, 2]
        assert blocks[1].start == len(header_block)

    def test_odd_delimiters_raise(self, header_block) -> None:
        with pytest.raises(FileFormatError, match="Unbalanced"):
            scan_blocks(header_block + b"    -1\n   151\n")

    def test_no_delimiters_raise(self) -> None:
        with pytest.raises(FileFormatError, match="No valid blocks"):
            scan_blocks(b"just some text\nwithout delimiters\n")

    def test_numeric_near_misses_ignored(self) -> None:
        data = b"    -1\n    82\n    -10\n    -1.5\n    -1\n"
        assert scan_blocks(data) == [BlockRange(number=1, start=0, end=len(data) - 7)]

    def test_trailing_blanks_on_delimiter(self) -> None:
        data = b"    -1" + b" " * 74 + b"\n   151\nA\nB\n    -1   \n"
        assert len(scan_blocks(data)) == 1

    def test_delimiter_without_final_newline(self) -> None:
        data = b"    -1\n   151\nA\nB\n    -1"
        assert len(scan_blocks(data)) == 1

    def test_padded_delimiter_after_binary_payload(self) -> None:
        header = _binary_header(58, 1, 4).encode()
        data = (
            b"    -1\n" + header + b"\nA\nB\n" + b"\x00\x00\x80\x3f"
            + b"    -1" + b" " * 74 + b"\n"
        )
        blocks = scan_blocks(data)
        assert len(blocks) == 1
        assert data[blocks[0].end - 4 : blocks[0].end] == b"\x00\x00\x80\x3f"


# -----------------------------------------------------------------------
# parse_block_header
# -----------------------------------------------------------------------

class TestParseBlockHeader:
    """Test envelope decoding and line tables"""

    def test_ascii_envelope(self, nodes_block) -> None:
        parsed = parse_block_header(nodes_block, scan_blocks(nodes_block)[0])
        assert parsed.envelope.type_code == 15
        assert parsed.envelope.binary is False
        assert len(parsed.lines) == 2
        assert parsed.newline == b"\n"

    def test_line_offsets_are_absolute(self, header_block, make_block) -> None:
        data = header_block + make_block("   164", ["first", "second"])
        second = scan_blocks(data)[1]
        parsed = parse_block_header(data, second)
        start, end = parsed.lines[0]
        assert data[start:end] == b"first"

    def test_crlf_lines(self, make_block) -> None:
        data = make_block("   151", ["Model", "Description"], newline="\r\n")
        parsed = parse_block_header(data, scan_blocks(data)[0])
        assert parsed.newline == b"\r\n"
        assert [data[s:e] for s, e in parsed.lines] == [b"Model", b"Description"]

    def test_stray_carriage_return_stripped(self) -> None:
        data = b"    -1\n   151\nModel\r\nDescription\nApp\n    -1\n"
        parsed = parse_block_header(data, scan_blocks(data)[0])
        assert parsed.newline == b"\n"
        assert data[slice(*parsed.lines[0])] == b"Model"

    def test_empty_lines_dropped(self) -> None:
        data = b"    -1\n   151\n\nA\n\nB\n    -1\n"
        parsed = parse_block_header(data, scan_blocks(data)[0])
        assert [data[s:e] for s, e in parsed.lines] == [b"A", b"B"]

    def test_empty_block_raises(self) -> None:
        data = b"    -1\n   151\n    -1\n"
        with pytest.raises(ParseError, match="empty data block"):
            parse_block_header(data, scan_blocks(data)[0])

    def test_single_content_line_is_empty_block(self) -> None:
        data = b"    -1\n   151\nOnly one\n    -1\n"
        with pytest.raises(ParseError, match="empty data block"):
            parse_block_header(data, scan_blocks(data)[0])

    def test_non_numeric_type_code_raises(self) -> None:
        data = b"    -1\n  abcd\nA\nB\n    -1\n"
        with pytest.raises(ParseError, match="no valid data-set type"):
            parse_block_header(data, scan_blocks(data)[0])

    def test_short_header_falls_back_with_warning(self) -> None:
        data = b"    -1\n15\nA\nB\n    -1\n"
        parsed = parse_block_header(data, scan_blocks(data)[0])
        assert parsed.envelope.type_code == 15
        assert len(parsed.warnings) == 1

    def test_binary_envelope(self, make_block) -> None:
        data = make_block(_binary_header(58, 2, 4000), ["A", "B"])
        envelope = parse_block_header(data, scan_blocks(data)[0]).envelope
        assert envelope.type_code == 58
        assert envelope.binary is True
        assert envelope.byte_order == 2
        assert envelope.float_format == 2
        assert envelope.ascii_line_count == 11
        assert envelope.byte_count == 4000
        assert envelope.aux == (0, 0, 0, 0)
        assert envelope.numpy_byte_order == ">"

    def test_uppercase_binary_marker(self, make_block) -> None:
        header = _binary_header(58, 1, 16).replace("b", "B", 1)
        data = make_block(header, ["A", "B"])
        envelope = parse_block_header(data, scan_blocks(data)[0]).envelope
        assert envelope.binary is True
        assert envelope.numpy_byte_order == "<"

    def test_zero_byte_order_defaults_to_little(self, make_block) -> None:
        data = make_block(_binary_header(58, 0, 16), ["A", "B"])
        envelope = parse_block_header(data, scan_blocks(data)[0]).envelope
        assert envelope.byte_order == 1
