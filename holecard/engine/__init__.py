"""
Driving engine for the holecard table.

This package connects the synchronous round to asynchronous presentation
adapters and owns presentation pacing.
"""

from holecard.engine.table import DEFAULT_CONFIG, TableEngine

__all__ = ["DEFAULT_CONFIG", "TableEngine"]
