#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Block scanner and block header parser

A Universal File is a sequence of blocks, each bounded by two delimiter
lines holding ``-1`` right-justified in columns 1–6::

        -1
        58b     1     2          11        8000     0     0           0           0
    <11 ASCII lines, then for 58b a raw binary payload>
        -1

:func:`scan_blocks` locates the delimiters in the raw file bytes and
pairs them into :class:`BlockRange` objects.  :func:`parse_block_header`
then builds the line table of one block and decodes its header line
into a :class:`DatasetEnvelope`.

Delimiter Recognition
---------------------
A delimiter is ``    -1`` either

* at the start of a line, followed only by blanks up to a line break or
  the end of the file, or
* padded with blanks to 80 columns and followed by a line break or the
  end of the file, anywhere in the buffer.  This second form finds the
  closing delimiter that follows a binary payload without a line break.

Numeric near-matches such as ``-10`` or ``-1.5`` never qualify because
the ``-1`` must be followed by blanks and then a line break.

Binary Header Columns
---------------------
=======  ==================================
Columns  Field
=======  ==================================
1–6      type code
7        ``b`` / ``B`` binary marker
8–13     byte order (1 little, 2 big endian)
14–19    floating-point format (2 IEEE 754)
20–31    number of ASCII lines
32–43    number of payload bytes
44–80    four auxiliary integers
=======  ==================================
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from pyunv.exceptions import FileFormatError, ParseError
from pyunv.utils.constants import (
    BINARY_MARKER,
    BYTE_ORDER_BIG,
    BYTE_ORDER_LITTLE,
    FLOAT_FORMAT_IEEE,
    TYPE_CODE_WIDTH,
)
from pyunv.utils.parsing import int_uff

logger = logging.getLogger(__name__)

SENTINEL_PATTERN: re.Pattern[bytes] = re.compile(
    rb"(?:(?<=[\r\n])|^)    -1 *(?=\r|\n|\Z)"
    rb"|    -1 {74}(?=\r|\n|\Z)"
)
"""Compiled delimiter pattern (see module notes)."""

_AUX_COLUMNS: tuple[tuple[int, int | None], ...] = (
    (43, 49),
    (49, 55),
    (55, 67),
    (67, None),
)


@dataclass(frozen=True)
class BlockRange:
    """Byte range of one block

    Parameters
    ----------
    number : int
        1-based block number.
    start : int
        Offset of the opening delimiter.
    end : int
        Offset of the closing delimiter (exclusive end of the block).
    """

    number: int
    start: int
    end: int


@dataclass
class DatasetEnvelope:
    """Decoded block header line

    Only *byte_order*, *float_format* and *byte_count* influence
    decoding; the remaining binary fields are kept for inspection.
    """

    type_code: int
    binary: bool = False
    byte_order: int = BYTE_ORDER_LITTLE
    float_format: int = FLOAT_FORMAT_IEEE
    ascii_line_count: int = 0
    byte_count: int = 0
    aux: tuple[int, int, int, int] = (0, 0, 0, 0)

    @property
    def numpy_byte_order(self) -> str:
        """``"<"`` or ``">"`` for building NumPy dtypes."""
        return ">" if self.byte_order == BYTE_ORDER_BIG else "<"


@dataclass
class ParsedBlock:
    """A block ready for decoding

    Parameters
    ----------
    number : int
        1-based block number.
    envelope : DatasetEnvelope
        Decoded header line.
    newline : bytes
        Majority line terminator of the block, ``b"\\r\\n"`` or ``b"\\n"``.
    lines : list[tuple[int, int]]
        File-absolute ``(start, end)`` offsets of the content lines that
        follow the header line, terminators excluded and zero-length
        lines removed.
    end : int
        Offset of the closing delimiter.
    warnings : list[str]
        Formatting problems recovered while reading the header.
    """

    number: int
    envelope: DatasetEnvelope
    newline: bytes
    lines: list[tuple[int, int]]
    end: int
    warnings: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------

def scan_blocks(data: bytes) -> list[BlockRange]:
    """Locate and pair the ``-1`` delimiters of a Universal File

    Parameters
    ----------
    data : bytes
        Complete file contents.

    Returns
    -------
    list[BlockRange]
        One range per delimiter pair, in file order.

    Raises
    ------
    FileFormatError
        If no delimiter is found, or if the number of delimiters is odd.

    Examples
    --------
    >>> scan_blocks(b"    -1\\n   151\\nA\\nB\\n    -1\\n")
    [BlockRange(number=1, start=0, end=18)]
    """
    starts = [m.start() for m in SENTINEL_PATTERN.finditer(data)]
    if not starts:
        raise FileFormatError("No valid blocks found")
    if len(starts) % 2:
        raise FileFormatError(
            f"Unbalanced (odd) -1 tags found ({len(starts)} tags); "
            "one block is not closed"
        )
    blocks = [
        BlockRange(number=k + 1, start=starts[2 * k], end=starts[2 * k + 1])
        for k in range(len(starts) // 2)
    ]
    logger.debug("Found %d blocks", len(blocks))
    return blocks


# ---------------------------------------------------------------------------
# Header parser
# ---------------------------------------------------------------------------

def _detect_newline(segment: bytes) -> bytes:
    crlf = segment.count(b"\r\n")
    lf_only = segment.count(b"\n") - crlf
    return b"\r\n" if crlf > lf_only else b"\n"


def _line_table(segment: bytes, offset: int, newline: bytes) -> list[tuple[int, int]]:
    """Absolute ``(start, end)`` offsets of the non-empty lines of *segment*"""
    table: list[tuple[int, int]] = []
    pos = 0
    size = len(segment)
    step = len(newline)
    while pos < size:
        brk = segment.find(newline, pos)
        stop = size if brk < 0 else brk
        end = stop
        if newline == b"\n" and end > pos and segment[end - 1 : end] == b"\r":
            end -= 1
        if end > pos:
            table.append((offset + pos, offset + end))
        pos = size if brk < 0 else brk + step
    return table


def _parse_envelope(header: str, warnings: list[str], number: int) -> DatasetEnvelope:
    if len(header.rstrip()) < TYPE_CODE_WIDTH:
        msg = f"Badly formatted type code line in block {number}: {header!r}"
        warnings.append(msg)
        tokens = header.split()
        if not tokens:
            raise ParseError("no valid data-set type found")
        try:
            return DatasetEnvelope(type_code=int(tokens[0]))
        except ValueError as exc:
            raise ParseError("no valid data-set type found") from exc

    try:
        type_code = int(header[:TYPE_CODE_WIDTH])
    except ValueError as exc:
        raise ParseError("no valid data-set type found") from exc

    marker = header[TYPE_CODE_WIDTH : TYPE_CODE_WIDTH + 1]
    if marker.lower() != BINARY_MARKER:
        return DatasetEnvelope(type_code=type_code)

    padded = header.ljust(80)
    aux = tuple(int_uff(padded[a:b]) for a, b in _AUX_COLUMNS)
    return DatasetEnvelope(
        type_code=type_code,
        binary=True,
        byte_order=int_uff(padded[7:13]) or BYTE_ORDER_LITTLE,
        float_format=int_uff(padded[13:19]),
        ascii_line_count=int_uff(padded[19:31]),
        byte_count=int_uff(padded[31:43]),
        aux=aux,  # type: ignore[arg-type]
    )


def parse_block_header(data: bytes, block: BlockRange) -> ParsedBlock:
    """Build the line table of *block* and decode its header line

    Parameters
    ----------
    data : bytes
        Complete file contents.
    block : BlockRange
        Range produced by :func:`scan_blocks`.

    Returns
    -------
    ParsedBlock
        Envelope plus absolute content-line table.

    Raises
    ------
    ParseError
        If the header line carries no type code or fewer than two
        content lines remain.  The error concerns this block only.
    """
    segment = data[block.start : block.end]
    newline = _detect_newline(segment)
    table = _line_table(segment, block.start, newline)

    # table[0] is the opening delimiter, table[1] the header line
    if len(table) < 2:
        raise ParseError(f"empty data block found (block {block.number})")
    start, end = table[1]
    header = data[start:end].decode("latin-1")

    warnings: list[str] = []
    envelope = _parse_envelope(header, warnings, block.number)
    lines = table[2:]
    if len(lines) < 2:
        raise ParseError(f"empty data block found (block {block.number})")

    logger.debug(
        "Block %d: type %d%s, %d content lines",
        block.number, envelope.type_code, "b" if envelope.binary else "", len(lines),
    )
    return ParsedBlock(
        number=block.number,
        envelope=envelope,
        newline=newline,
        lines=lines,
        end=block.end,
        warnings=warnings,
    )
