"""
Presentation adapters for the holecard engine.

This package provides adapters that put a round on a particular front-end
(the console, a test script, a 3D table) without touching game rules.
"""

from holecard.adapters.base import TableAdapter
from holecard.adapters.cli import CLIAdapter
from holecard.adapters.dummy import DummyAdapter

__all__ = ["TableAdapter", "CLIAdapter", "DummyAdapter"]
