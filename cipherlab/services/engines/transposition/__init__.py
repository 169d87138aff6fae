"""Transposition cipher engines."""

from cipherlab.services.engines.transposition.rail_fence import RailFenceEngine
from cipherlab.services.engines.transposition.columnar import ColumnarEngine

__all__ = [
    "RailFenceEngine",
    "ColumnarEngine",
]
