#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Abstract base class for all record encoders

Every concrete encoder inherits from :class:`BaseEncoder` and implements
:meth:`~BaseEncoder.render`, which returns the complete body of one block
(header line plus content, without the two ``-1`` delimiter lines) as
bytes.  Rendering happens entirely in memory, so a record that fails to
encode never leaves a partial block in the output file.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Literal

from pyunv.exceptions import EncodeError, PyUNVError
from pyunv.models.records import Record
from pyunv.utils.constants import LINE_WIDTH

logger = logging.getLogger(__name__)

ByteOrder = Literal["little", "big"]


@dataclass
class EncodeOptions:
    """Per-call options shared by all encoders

    Parameters
    ----------
    byte_order : ``"little"`` | ``"big"``
        Byte order of 58b binary payloads.  Default ``"little"``.
    verbose : bool
        Emit warnings through ``logging`` at WARNING level when ``True``,
        at DEBUG level otherwise.  They are always collected.
    """

    byte_order: ByteOrder = "little"
    verbose: bool = True
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.log(logging.WARNING if self.verbose else logging.DEBUG, message)


@dataclass
class EncodeResult:
    """Outcome of one encode: the block body or an error, plus warnings"""

    payload: bytes | None
    error: PyUNVError | None = None
    warnings: list[str] = field(default_factory=list)


def type_line(type_code: int) -> str:
    """ASCII header line of a block: the type code in columns 1–6."""
    return f"{type_code:6d}".ljust(LINE_WIDTH)


class BaseEncoder(ABC):
    """Abstract base for Universal File record encoders

    Subclasses set :attr:`type_codes` and override :meth:`render`.
    Structural problems raise :class:`~pyunv.exceptions.ValidationError`
    or :class:`~pyunv.exceptions.EncodeError`; :meth:`encode` turns them
    into an :class:`EncodeResult`.
    """

    type_codes: ClassVar[tuple[int, ...]] = ()

    def encode(self, record: Record, options: EncodeOptions | None = None) -> EncodeResult:
        """Render one record, capturing any record-level failure

        Parameters
        ----------
        record : Record
            Record to encode.
        options : EncodeOptions, optional
            Per-call options.

        Returns
        -------
        EncodeResult
            ``payload`` set on success, ``error`` set on failure.
        """
        if options is None:
            opts = EncodeOptions()
        else:
            opts = EncodeOptions(options.byte_order, options.verbose)
        try:
            payload = self.render(record, opts)
        except PyUNVError as exc:
            return EncodeResult(None, exc, opts.warnings)
        except (ValueError, TypeError, IndexError) as exc:
            error = EncodeError(f"error writing type {record.type_code}: {exc}")
            error.__cause__ = exc
            return EncodeResult(None, error, opts.warnings)
        return EncodeResult(payload, None, opts.warnings)

    @abstractmethod
    def render(self, record: Record, options: EncodeOptions) -> bytes:
        """Return the block body of *record*

        Raises
        ------
        ValidationError
            If the record's arrays have inconsistent shapes.
        EncodeError
            If the record holds a value the format cannot express.
        """
        ...
