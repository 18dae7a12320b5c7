"""
Elemental tallies and condensed formulas.

AtomCounter walks a compound graph from a root node, counting every center
atom and every atom held in substituents, and renders the tally as a
condensed formula: carbon first, hydrogen second, then the remaining
elements by ascending atomic number. A count of one is not written.

    >>> graph = CompoundGraph()
    >>> methyl = graph.add_compound(Atom.from_atomic_number(6))
    >>> graph.add_substituent(methyl, Molecule.of(1, 1, 1))
    >>> condensed_formula(graph, methyl)
    'CH3'
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping

from chemchain.elements import FORMULA_PRIORITY, get_symbol
from chemchain.graph import CompoundGraph
from chemchain.types import Compound, Compounds


def formula_order(atomic_numbers: Iterable[int]) -> list[int]:
    """Order atomic numbers for formula rendering.

    Args:
        atomic_numbers: Distinct atomic numbers present in a tally.

    Returns:
        Carbon and hydrogen first (when present), then ascending order.
    """
    present = set(atomic_numbers)
    head = [num for num in FORMULA_PRIORITY if num in present]
    return head + sorted(present.difference(FORMULA_PRIORITY))


def format_formula(counts: Mapping[int, int]) -> str:
    """Render a tally mapping atomic number to count.

    Example:
        >>> format_formula({6: 2, 1: 6, 8: 1})
        'C2H6O'
    """
    parts = []
    for num in formula_order(n for n, c in counts.items() if c > 0):
        count = counts[num]
        symbol = get_symbol(num)
        parts.append(symbol if count == 1 else f"{symbol}{count}")
    return "".join(parts)


class AtomCounter:
    """Tally of atoms by atomic number.

    Attributes:
        counts: Mapping from atomic number to number of atoms.
    """

    def __init__(self, counts: Mapping[int, int] | None = None) -> None:
        self.counts: Counter[int] = Counter(counts or {})

    @classmethod
    def from_compound(cls, graph: CompoundGraph, root: int | Compound) -> "AtomCounter":
        """Count every atom reachable from a compound.

        Side-chain links are followed once per node, so cyclic graphs
        are counted correctly.

        Args:
            graph: Graph owning the compound.
            root: The start compound or its index.

        Returns:
            The tally of all reachable atoms.
        """
        root_idx = root.idx if isinstance(root, Compound) else root
        counter = cls()
        for compound in graph.iter_reachable(root_idx):
            counter._add_compound(compound)
        return counter

    @classmethod
    def from_compounds(cls, compounds: Compounds) -> "AtomCounter":
        """Count the atoms of the compounds in a builder result tree.

        Unlike from_compound, this does not follow side-chain links; only
        the compounds listed in the tree are counted.
        """
        counter = cls()
        for compound in compounds:
            counter._add_compound(compound)
        return counter

    def _add_compound(self, compound: Compound) -> None:
        self.counts[compound.center.atomic_number] += 1
        for atom in compound.substituent_atoms():
            self.counts[atom.atomic_number] += 1

    def __getitem__(self, atomic_number: int) -> int:
        return self.counts.get(atomic_number, 0)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AtomCounter):
            return self.counts == other.counts
        if isinstance(other, Mapping):
            return self.counts == Counter(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"AtomCounter({dict(self.counts)!r})"

    def __str__(self) -> str:
        return self.to_formula()

    @property
    def total_atoms(self) -> int:
        """Total number of atoms counted."""
        return sum(self.counts.values())

    def to_formula(self) -> str:
        """Render the tally as a condensed formula string."""
        return format_formula(self.counts)


def condensed_formula(graph: CompoundGraph, root: int | Compound) -> str:
    """Condensed formula of everything reachable from a compound.

    Args:
        graph: Graph owning the compound.
        root: The start compound or its index.

    Returns:
        Formula string such as "C6H14".
    """
    return AtomCounter.from_compound(graph, root).to_formula()
