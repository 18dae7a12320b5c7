"""Linearization of builder results."""

from __future__ import annotations

from typing import Iterator

from chemchain.types import Chain, Compound, Compounds, Leaf


def flatten(compounds: Compounds) -> list[Compound]:
    """Flatten a Leaf/Chain tree in depth-first pre-order.

    Only the tree shape is walked; side-chain links between the compounds
    are ignored.

    Args:
        compounds: A Leaf or a (possibly nested) Chain.

    Returns:
        The compounds in tree order.

    Example:
        >>> flatten(Chain((Leaf(a), Chain((Leaf(b), Leaf(c))))))
        [a, b, c]
    """
    return list(_walk(compounds))


def _walk(compounds: Compounds) -> Iterator[Compound]:
    # Explicit stack so deep nesting cannot hit the recursion limit
    stack: list[Compounds] = [compounds]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            yield node.compound
        elif isinstance(node, Chain):
            stack.extend(reversed(node.items))
        else:
            raise TypeError(f"Expected Leaf or Chain, got {node!r}")
