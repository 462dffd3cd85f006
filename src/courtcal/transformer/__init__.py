"""Event transformation layer - normalize raw booking rows to calendar events."""

from __future__ import annotations

from courtcal.transformer.courts import CourtDirectory
from courtcal.transformer.dispatcher import Transformer
from courtcal.transformer.parser import Parser

__all__ = ["CourtDirectory", "Parser", "Transformer"]
