"""
Declarative builder for branched chain skeletons.

A ChainBuilder session reserves sequential atom indices with ``chain`` (the
parent chain and its extensions) and ``chain_at`` (branches attached at a
1-based locant of the parent chain). ``build`` then materializes every
reserved index as a Compound in a CompoundGraph, links bonded indices with
reciprocal side chains, and returns the Leaf/Chain tree of the skeleton.

    >>> builder = ChainBuilder()
    >>> builder.chain(5)
    >>> builder.chain_at(2, 1)
    >>> tree = builder.build()
    >>> len(list(tree))
    6
"""

from __future__ import annotations

import logging
from typing import Sequence

from chemchain.elements import CARBON, get_element
from chemchain.exceptions import (
    BuilderConsumedError,
    ChainInvariantError,
    ConstructionError,
    InvalidLocantError,
    UnconfiguredParentChainError,
)
from chemchain.graph import CompoundGraph
from chemchain.types import Atom, Chain, Compound, Compounds, Leaf

logger = logging.getLogger(__name__)


def _check_length(n: object) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise ConstructionError(f"Chain length must be a positive integer, got {n!r}")
    return n


class ChainBuilder:
    """Stateful session turning chain/branch calls into a compound skeleton.

    Args:
        elements: Atomic number used for every atom, or a sequence giving the
            atomic number of each atom by index. Defaults to carbon.
        graph: Graph to materialize into. A new one is created if omitted.

    Raises:
        ConstructionError: If any atomic number is invalid.
    """

    def __init__(
        self,
        elements: int | Sequence[int] = CARBON,
        *,
        graph: CompoundGraph | None = None,
    ) -> None:
        if isinstance(elements, int):
            self._centers: Atom | tuple[Atom, ...] = Atom.from_atomic_number(elements)
        else:
            self._centers = tuple(Atom(get_element(num)) for num in elements)

        self._graph = graph if graph is not None else CompoundGraph()
        self._parent_chain_length = 0
        self._current_size = 0
        # Parent chain index -> branch index ranges, in registration order
        self._adjacency: dict[int, list[range]] = {}
        # Parent chain indices in bond order, extensions included
        self._path: list[int] = []
        self._consumed = False

    @property
    def graph(self) -> CompoundGraph:
        """The graph build() materializes into."""
        return self._graph

    @property
    def size(self) -> int:
        """Total number of reserved atom indices across all chains."""
        return self._current_size

    def chain_len(self) -> int:
        """Length of the parent chain set by the first chain() call.

        Branches and later extensions are not counted.
        """
        return self._parent_chain_length

    def branches_at(self, locant: int) -> list[range]:
        """Branch index ranges registered at a locant, in call order."""
        idx = self._index_for_locant(locant)
        return list(self._adjacency[idx])

    def chain(self, n: int) -> None:
        """Extend the parent chain by ``n`` atoms.

        The first call fixes the parent chain length used to validate
        locants. Later calls keep extending the path from its last atom.

        Args:
            n: Number of atoms to add (positive).

        Raises:
            ConstructionError: If ``n`` is not positive or the element
                sequence does not cover the new atoms.
            BuilderConsumedError: If build() was already called.
        """
        self._check_open()
        _check_length(n)
        new = self._reserve(n)

        for idx in new:
            self._adjacency[idx] = []
        self._path.extend(new)
        if self._parent_chain_length == 0:
            self._parent_chain_length = n
        logger.debug("Reserved parent chain atoms %d..%d", new.start, new.stop - 1)

    def chain_at(self, locant: int, n: int) -> None:
        """Attach a branch of ``n`` atoms at a locant of the parent chain.

        Branches registered on the same locant accumulate in call order.
        A failed call leaves the session unchanged.

        Args:
            locant: 1-based position on the parent chain.
            n: Number of atoms in the branch (positive).

        Raises:
            UnconfiguredParentChainError: If chain() was never called.
            InvalidLocantError: If the locant is outside [1, chain_len()].
            ConstructionError: If ``n`` is not positive or the element
                sequence does not cover the new atoms.
            BuilderConsumedError: If build() was already called.
        """
        self._check_open()
        owner = self._index_for_locant(locant)
        _check_length(n)
        branch = self._reserve(n)

        self._adjacency[owner].append(branch)
        logger.debug(
            "Reserved branch atoms %d..%d at locant %d",
            branch.start, branch.stop - 1, locant,
        )

    def build(self) -> Compounds:
        """Materialize the session into compounds and consume it.

        Returns:
            A Leaf when exactly one atom was reserved, otherwise a Chain
            of the parent chain where every branch follows the atom that
            owns it as a nested Chain.

        Raises:
            UnconfiguredParentChainError: If chain() was never called.
            BuilderConsumedError: If build() was already called.
            ChainInvariantError: If the session state is inconsistent.
        """
        self._check_open()
        if self._current_size == 0:
            raise UnconfiguredParentChainError()
        self._check_invariants()
        # A session materializes at most once, even if a link below fails
        self._consumed = True

        graph = self._graph
        nodes: list[Compound] = [
            graph[graph.add_compound(self._center_for(i))]
            for i in range(self._current_size)
        ]

        for prev, cur in zip(self._path, self._path[1:]):
            graph.add_side_chain(nodes[prev].idx, nodes[cur].idx)

        for owner, branches in self._adjacency.items():
            for branch in branches:
                graph.add_side_chain(nodes[owner].idx, nodes[branch.start].idx)
                for prev, cur in zip(branch, branch[1:]):
                    graph.add_side_chain(nodes[prev].idx, nodes[cur].idx)

        logger.debug(
            "Built %d compounds (parent chain %d)",
            self._current_size, self._parent_chain_length,
        )

        if self._current_size == 1:
            return Leaf(nodes[0])

        items: list[Compounds] = []
        for idx in self._path:
            items.append(Leaf(nodes[idx]))
            for branch in self._adjacency[idx]:
                items.append(Chain(tuple(Leaf(nodes[i]) for i in branch)))
        return Chain(tuple(items))

    def _check_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError("ChainBuilder was already consumed by build()")

    def _index_for_locant(self, locant: int) -> int:
        if self._parent_chain_length == 0:
            raise UnconfiguredParentChainError()
        if (
            isinstance(locant, bool)
            or not isinstance(locant, int)
            or not 1 <= locant <= self._parent_chain_length
        ):
            raise InvalidLocantError(locant, self._parent_chain_length)
        idx = self._path[locant - 1]
        if idx not in self._adjacency:
            raise InvalidLocantError(locant, self._parent_chain_length)
        return idx

    def _reserve(self, n: int) -> range:
        start = self._current_size
        if isinstance(self._centers, tuple) and start + n > len(self._centers):
            raise ConstructionError(
                f"Element sequence covers {len(self._centers)} atoms, "
                f"cannot reserve atoms {start}..{start + n - 1}"
            )
        self._current_size += n
        return range(start, start + n)

    def _center_for(self, idx: int) -> Atom:
        if isinstance(self._centers, tuple):
            return self._centers[idx]
        return self._centers

    def _check_invariants(self) -> None:
        size = self._current_size
        for idx in self._path:
            if not 0 <= idx < size:
                raise ChainInvariantError(f"Parent chain index {idx} was never reserved")
        for owner, branches in self._adjacency.items():
            if not 0 <= owner < size:
                raise ChainInvariantError(f"Branch owner {owner} was never reserved")
            for branch in branches:
                if not branch or branch.start < 0 or branch.stop > size:
                    raise ChainInvariantError(
                        f"Branch {branch.start}..{branch.stop - 1} at {owner} "
                        f"exceeds {size} reserved atoms"
                    )
