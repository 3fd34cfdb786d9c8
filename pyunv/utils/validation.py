#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Pre-encode validation routines for Universal File records

Every validation function raises :class:`~pyunv.exceptions.ValidationError`
when a constraint is violated.  Encoders call these functions before
rendering so that a malformed record is reported as a record-level error
and nothing is written for it.

Checked Constraints
-------------------
* Per-entity arrays of one record have equal lengths.
* Point and matrix arrays have the expected trailing shape.
* Measurement abscissa and ordinates have the same length.
* Option values belong to their allowed set.

Design Note
-----------
Validation functions accept raw NumPy arrays or scalar values, not
dataclass model instances, so that the ``models`` layer does not depend
on ``utils``::

    utils ← models ← readers / writers ← converters
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from pyunv.exceptions import ValidationError

logger = logging.getLogger(__name__)


def validate_equal_lengths(**arrays: np.ndarray) -> int:
    """Verify that every keyword array has the same first dimension

    Returns
    -------
    int
        The common length.

    Raises
    ------
    ValidationError
        If the lengths differ.

    Examples
    --------
    >>> validate_equal_lengths(labels=np.arange(3), x=np.zeros(3))
    3
    """
    lengths = {name: len(np.asarray(a)) for name, a in arrays.items()}
    unique = set(lengths.values())
    if len(unique) > 1:
        detail = ", ".join(f"{k}={v}" for k, v in lengths.items())
        raise ValidationError(f"Per-entity arrays differ in length: {detail}")
    return unique.pop() if unique else 0


def validate_shape(array: np.ndarray, trailing: tuple[int, ...], name: str) -> None:
    """Verify that *array* has shape ``(N, *trailing)``

    Raises
    ------
    ValidationError
        If the number of dimensions or the trailing extents differ.
    """
    arr = np.asarray(array)
    if arr.ndim != 1 + len(trailing) or tuple(arr.shape[1:]) != tuple(trailing):
        expected = "(N, " + ", ".join(str(t) for t in trailing) + ")"
        raise ValidationError(
            f"{name} must have shape {expected}, got {arr.shape}"
        )


def validate_choice(value: object, choices: Iterable[object], name: str) -> None:
    """Verify that *value* is one of *choices*

    Raises
    ------
    ValidationError
        If *value* is not allowed.
    """
    allowed = list(choices)
    if value not in allowed:
        raise ValidationError(f"{name} must be one of {allowed}, got {value!r}")


def validate_series(x: np.ndarray, data: np.ndarray) -> int:
    """Verify a measurement series before encoding

    Parameters
    ----------
    x : numpy.ndarray
        Abscissa values, shape ``(N,)``.
    data : numpy.ndarray
        Ordinate values, shape ``(N,)``, real or complex.

    Returns
    -------
    int
        Number of samples *N*.

    Raises
    ------
    ValidationError
        If either array is not one-dimensional, the lengths differ, the
        series is empty, or the abscissa holds non-finite values.
    """
    xa = np.asarray(x)
    da = np.asarray(data)
    if xa.ndim != 1 or da.ndim != 1:
        raise ValidationError(
            f"Measurement abscissa and ordinates must be 1-D, got {xa.shape} and {da.shape}"
        )
    if xa.size != da.size:
        raise ValidationError(
            f"Measurement abscissa has {xa.size} values but ordinates have {da.size}"
        )
    if xa.size == 0:
        raise ValidationError("Measurement series is empty")
    if not np.all(np.isfinite(xa)):
        raise ValidationError("Measurement abscissa contains non-finite values")
    logger.debug("Validated measurement series of %d samples", xa.size)
    return int(xa.size)
