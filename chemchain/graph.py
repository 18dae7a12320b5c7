"""
Compound graph arena.

A CompoundGraph owns Compound nodes addressed by stable integer indices and
is the only place where they are mutated. Side-chain links are stored as
index lists on both endpoints and are kept reciprocal: after any successful
``add_side_chain(a, b)``, ``b`` is linked from ``a`` and ``a`` from ``b``.

Mutation of a node is exclusive. A mutating call try-acquires the node's
lock without blocking and raises MutationConflictError when the node is
already held, instead of waiting.
"""

from __future__ import annotations

import logging
from collections import deque
from contextlib import ExitStack, contextmanager
from typing import Iterator

from chemchain.exceptions import MutationConflictError
from chemchain.types import Atom, Compound, Molecule, Particle

logger = logging.getLogger(__name__)


class CompoundGraph:
    """Arena of compound nodes with reciprocal side-chain links.

    Example:
        >>> graph = CompoundGraph()
        >>> a = graph.add_compound(Atom.from_atomic_number(6))
        >>> b = graph.add_compound(Atom.from_atomic_number(6))
        >>> graph.add_side_chain(a, b)
        >>> graph[b].side_chains
        [0]
    """

    def __init__(self) -> None:
        self._compounds: list[Compound] = []

    def __len__(self) -> int:
        """Return number of compounds."""
        return len(self._compounds)

    def __iter__(self) -> Iterator[Compound]:
        """Iterate over compounds in index order."""
        return iter(self._compounds)

    def __getitem__(self, idx: int) -> Compound:
        """Get compound by index.

        Raises:
            IndexError: If no compound has this index.
        """
        if not 0 <= idx < len(self._compounds):
            raise IndexError(f"Compound index out of bounds: {idx}")
        return self._compounds[idx]

    def __contains__(self, compound: object) -> bool:
        """Check whether this graph owns the given compound node."""
        return (
            isinstance(compound, Compound)
            and 0 <= compound.idx < len(self._compounds)
            and self._compounds[compound.idx] is compound
        )

    @property
    def num_compounds(self) -> int:
        """Number of compounds in the graph."""
        return len(self._compounds)

    def add_compound(self, center: Atom) -> int:
        """Add an empty compound with the given center atom.

        Args:
            center: The center atom.

        Returns:
            Index of the new compound.
        """
        if not isinstance(center, Atom):
            raise TypeError(f"Compound center must be an Atom, got {center!r}")
        idx = len(self._compounds)
        self._compounds.append(Compound(idx=idx, center=center))
        return idx

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    @contextmanager
    def hold(self, idx: int) -> Iterator[Compound]:
        """Hold a compound exclusively for the duration of a block.

        Any other mutation of the node while the block runs, including one
        made from inside the block, fails with MutationConflictError.

        Args:
            idx: Index of the compound.

        Yields:
            The held compound.

        Raises:
            MutationConflictError: If the node is already held.
        """
        compound = self[idx]
        if not compound._lock.acquire(blocking=False):
            raise MutationConflictError(idx)
        try:
            yield compound
        finally:
            compound._lock.release()

    def add_substituent(self, idx: int, particle: Particle) -> None:
        """Append a substituent particle to a compound.

        Args:
            idx: Index of the compound.
            particle: Atom or Molecule to attach.

        Raises:
            MutationConflictError: If the node is under another mutation.
        """
        if not isinstance(particle, (Atom, Molecule)):
            raise TypeError(f"Not a particle: {particle!r}")
        with self.hold(idx) as compound:
            compound.substituents.append(particle)

    def add_side_chain(self, idx: int, neighbor_idx: int) -> None:
        """Link two compounds in both directions.

        Linking a node to itself and repeating an existing link are no-ops.
        Both nodes are held before either is changed, so a conflict on
        either one leaves the graph untouched.

        Args:
            idx: Index of the compound.
            neighbor_idx: Index of the compound to link to.

        Raises:
            MutationConflictError: If either node is under another mutation.
        """
        compound = self[idx]
        neighbor = self[neighbor_idx]
        if compound is neighbor or neighbor_idx in compound.side_chains:
            return

        with ExitStack() as stack:
            for node in (compound, neighbor):
                try:
                    stack.enter_context(self.hold(node.idx))
                except MutationConflictError:
                    logger.debug("Link %d-%d refused: %d is busy", idx, neighbor_idx, node.idx)
                    raise

            # Re-check under both holds; a concurrent call may have linked them.
            if neighbor_idx in compound.side_chains:
                return
            compound.side_chains.append(neighbor_idx)
            try:
                neighbor.side_chains.append(idx)
            except BaseException:
                compound.side_chains.pop()
                raise

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def iter_reachable(self, root: int) -> Iterator[Compound]:
        """Breadth-first walk over side-chain links.

        Each compound is yielded once, so cycles formed by reciprocal links
        terminate.

        Args:
            root: Index of the start compound.

        Yields:
            Reachable compounds, starting with the root.
        """
        start = self[root]
        visited: set[int] = {start.idx}
        queue = deque([start])

        while queue:
            compound = queue.popleft()
            yield compound
            for neighbor_idx in list(compound.side_chains):
                if neighbor_idx not in visited:
                    visited.add(neighbor_idx)
                    queue.append(self._compounds[neighbor_idx])

    def connected_components(self) -> list[list[int]]:
        """Find connected components of the graph.

        Returns:
            List of components, each being a sorted list of compound indices.
        """
        seen: set[int] = set()
        components: list[list[int]] = []

        for start in range(len(self._compounds)):
            if start in seen:
                continue
            component = sorted(c.idx for c in self.iter_reachable(start))
            seen.update(component)
            components.append(component)

        return components

    @property
    def is_connected(self) -> bool:
        """Check if the graph is a single connected component."""
        return len(self.connected_components()) <= 1
