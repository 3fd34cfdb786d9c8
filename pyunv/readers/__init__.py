#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Universal File decoders

* :func:`~pyunv.readers.scanner.scan_blocks` — locate ``-1`` delimited blocks
* :func:`~pyunv.readers.scanner.parse_block_header` — envelope and line table
* :class:`~pyunv.readers.uff.UFFReader` — the read orchestrator

One decoder per record family shares the
:class:`~pyunv.readers.base.BaseDecoder` interface.
"""

from __future__ import annotations

from pyunv.readers.scanner import parse_block_header, scan_blocks
from pyunv.readers.uff import DECODERS, UFFReader, read_uff

__all__ = ["scan_blocks", "parse_block_header", "DECODERS", "UFFReader", "read_uff"]
