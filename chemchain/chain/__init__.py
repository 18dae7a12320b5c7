"""Chain skeleton building and flattening."""

from chemchain.chain.builder import ChainBuilder
from chemchain.chain.flatten import flatten

__all__ = [
    "ChainBuilder",
    "flatten",
]
