"""Mathematical primitives for pool accounting.

This package provides:
- isqrt: integer square root for share sizing and fee growth
- UQ112x112: binary fixed-point ratios for price accumulators
"""

from pairswap.math.sqrt import isqrt
from pairswap.math.uq112x112 import Q112, UQ112x112, encode, uqdiv

__all__ = ["isqrt", "UQ112x112", "Q112", "encode", "uqdiv"]
