#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared fixed-column parsing and formatting helpers for the PyUNV package

All low-level text extraction, numeric conversion and Fortran-style
number formatting lives here so that none of the decoder or encoder
modules duplicates format-specific logic.

Universal File Fixed-Width Format
---------------------------------
Every record line is logically 80 characters wide.  Physical lines may
be shorter (trailing blanks trimmed by the producing program); they are
right-padded to 80 columns before any column slice is taken, so a slice
past the physical end yields blanks rather than an error.

Floating-point values are written with Fortran ``E`` or ``D`` edit
descriptors.  The ``D`` exponent marker (``1.0D+00``) is normalised to
``E`` before conversion everywhere, not only in the record types that
mandate it.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

import numpy as np

from pyunv.exceptions import ParseError
from pyunv.utils.constants import LINE_WIDTH

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

NUMBER_PATTERN: re.Pattern[str] = re.compile(
    r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[EeDd][-+]?\d+)?"
)
"""Free-form numeric token, including Fortran ``D`` exponents.

Tokens written back to back without a separating blank (``1.0E+00-2.0E+00``)
split correctly because a sign can only start a new token.
"""

_D_EXPONENT: re.Pattern[str] = re.compile(r"[Dd](?=[-+]?\d)")


# ---------------------------------------------------------------------------
# Field extraction
# ---------------------------------------------------------------------------

def pad_line(line: str, width: int = LINE_WIDTH) -> str:
    """Right-pad *line* with blanks to at least *width* characters"""
    return line.ljust(width)


def text_field(line: str, start: int = 0, stop: int | None = LINE_WIDTH) -> str:
    """Extract a trimmed text field from a fixed-column line

    Parameters
    ----------
    line : str
        Physical line (any length).
    start, stop : int
        0-based column slice.  *stop* defaults to the 80-column limit.

    Returns
    -------
    str
        The field with leading and trailing whitespace removed.
    """
    return pad_line(line)[start:stop].strip()


def normalize_exponent(s: str) -> str:
    """Replace Fortran ``D`` exponent markers with ``E``

    Examples
    --------
    >>> normalize_exponent("  1.00000000000000000D+00")
    '  1.00000000000000000E+00'
    """
    return _D_EXPONENT.sub("E", s)


def float_uff(s: str) -> float:
    """Convert a Universal File numeric field to a Python float

    Parameters
    ----------
    s : str
        Field text, possibly padded and possibly using a ``D`` exponent.

    Returns
    -------
    float
        The converted value.  Returns ``0.0`` for blank fields.

    Raises
    ------
    ParseError
        If the field is not a number.

    Examples
    --------
    >>> float_uff("  1.50000E+00")
    1.5
    >>> float_uff(" 2.54D-02")
    0.0254
    >>> float_uff("     ")
    0.0
    """
    t = normalize_exponent(s).strip()
    if not t:
        return 0.0
    try:
        return float(t)
    except ValueError as exc:
        raise ParseError(f"Cannot convert field {s!r} to float") from exc


def int_uff(s: str) -> int:
    """Convert a Universal File integer field to a Python int

    Blank fields read as ``0``.  Only the first token is used so that
    trailing text in the last field of a line is tolerated.

    Raises
    ------
    ParseError
        If the first token is not an integer.

    Examples
    --------
    >>> int_uff("        58")
    58
    >>> int_uff("          ")
    0
    """
    tokens = s.split()
    if not tokens:
        return 0
    try:
        return int(tokens[0])
    except ValueError as exc:
        raise ParseError(f"Cannot convert field {s!r} to int") from exc


def int_fields(line: str, width: int, count: int, start: int = 0) -> list[int]:
    """Slice *count* consecutive integer fields of *width* columns"""
    padded = pad_line(line, start + width * count)
    return [
        int_uff(padded[start + i * width : start + (i + 1) * width])
        for i in range(count)
    ]


def float_fields(line: str, width: int, count: int, start: int = 0) -> list[float]:
    """Slice *count* consecutive float fields of *width* columns"""
    padded = pad_line(line, start + width * count)
    return [
        float_uff(padded[start + i * width : start + (i + 1) * width])
        for i in range(count)
    ]


def scan_numbers(lines: Iterable[str]) -> np.ndarray:
    """Collect every numeric token of *lines* into one float64 array

    Used for the free-form numeric runs of node, measurement and
    response records, where field widths vary between producers.

    Examples
    --------
    >>> scan_numbers(["  1.0E+00  2.5D-01", "-3"])
    array([ 1.  ,  0.25, -3.  ])
    """
    values = [
        float(normalize_exponent(token))
        for line in lines
        for token in NUMBER_PATTERN.findall(line)
    ]
    return np.asarray(values, dtype="f8")


def scan_ints(lines: Iterable[str]) -> list[int]:
    """Collect every whitespace-separated integer of *lines*

    Raises
    ------
    ParseError
        If any token is not an integer.
    """
    values: list[int] = []
    for line in lines:
        for token in line.split():
            try:
                values.append(int(token))
            except ValueError as exc:
                raise ParseError(f"Non-integer token {token!r} in integer run") from exc
    return values


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_text(s: str, width: int = LINE_WIDTH) -> str:
    """Left-justify *s* in a *width*-column field, truncating if longer"""
    return str(s)[:width].ljust(width)


def format_exp(value: float, width: int, precision: int, marker: str = "E") -> str:
    """Format *value* like a Fortran ``Ew.d`` (or ``Dw.d``) edit descriptor

    Examples
    --------
    >>> format_exp(1.5, 13, 5)
    '  1.50000E+00'
    >>> format_exp(0.0254, 25, 16, marker="D")
    '   2.5400000000000000D-02'
    """
    text = f"{float(value):{width}.{precision}E}"
    if marker != "E":
        text = text.replace("E", marker)
    return text


def format_ints(values: Sequence[int], width: int = 10) -> str:
    """Concatenate integers right-justified in *width*-column fields"""
    return "".join(f"{int(v):{width}d}" for v in values)


def wrap_fields(values: Sequence, formats: Sequence, render) -> list[str]:
    """Lay *values* out on lines whose field pattern is *formats*

    Parameters
    ----------
    values : sequence
        Flat run of values to write.
    formats : sequence
        One entry per field of a full line; the pattern restarts on
        each new line.
    render : callable
        ``render(value, fmt) -> str`` producing one field.

    Returns
    -------
    list[str]
        Lines without terminators.  A trailing partial line is kept.
    """
    per_line = len(formats)
    lines: list[str] = []
    for offset in range(0, len(values), per_line):
        chunk = values[offset : offset + per_line]
        lines.append("".join(render(v, f) for v, f in zip(chunk, formats)))
    return lines


def join_lines(lines: Iterable[str]) -> bytes:
    """Terminate every line with ``\\n`` and encode octet-for-octet"""
    return "".join(f"{line}\n" for line in lines).encode("latin-1")
