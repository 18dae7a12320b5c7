"""
Core data types.

This module defines the value types that make up a compound (Atom, Molecule
and the Particle union), the Compound graph node, and the Leaf/Chain tree
returned by the chain builder.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Union

from chemchain.elements import Element, get_element
from chemchain.exceptions import ConstructionError

if TYPE_CHECKING:
    from chemchain.graph import CompoundGraph


@dataclass(frozen=True, slots=True)
class Atom:
    """An element plus isotope and charge bookkeeping.

    Attributes:
        element: The element of this atom.
        neutrons: Neutron count.
        electrons: Electron count; equal to the proton count unless ionized.
        oxidation_state: Optional oxidation state, carried as metadata only.
    """

    element: Element
    neutrons: int = 0
    electrons: int | None = None
    oxidation_state: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.element, Element):
            raise ConstructionError(f"Expected an Element, got {self.element!r}")
        if self.neutrons < 0:
            raise ConstructionError(f"Neutron count must be non-negative, got {self.neutrons}")
        if self.electrons is None:
            object.__setattr__(self, "electrons", self.element.atomic_number)
        elif self.electrons < 0:
            raise ConstructionError(f"Electron count must be non-negative, got {self.electrons}")

    @classmethod
    def from_atomic_number(
        cls,
        atomic_number: int,
        *,
        neutrons: int = 0,
        electrons: int | None = None,
        oxidation_state: int | None = None,
    ) -> "Atom":
        """Create an atom from its atomic number.

        Raises:
            ConstructionError: If the atomic number is not in 1..118.
        """
        return cls(get_element(atomic_number), neutrons, electrons, oxidation_state)

    @classmethod
    def from_symbol(cls, symbol: str, **kwargs: int | None) -> "Atom":
        """Create an atom from an element symbol such as "C" or "Cl"."""
        elem = Element.from_symbol(symbol)
        if elem is None:
            raise ConstructionError(f"Unknown element symbol {symbol!r}")
        return cls(elem, **kwargs)

    @property
    def atomic_number(self) -> int:
        """Proton count."""
        return self.element.atomic_number

    @property
    def symbol(self) -> str:
        return self.element.symbol

    @property
    def charge(self) -> int:
        """Formal charge (protons minus electrons)."""
        return self.element.atomic_number - self.electrons

    @property
    def mass_number(self) -> int:
        return self.element.atomic_number + self.neutrons


@dataclass(frozen=True, slots=True)
class Molecule:
    """An ordered group of atoms attached as one substituent.

    Attributes:
        atoms: The atoms, in attachment order. Never empty.
    """

    atoms: tuple[Atom, ...]

    def __post_init__(self) -> None:
        atoms = tuple(self.atoms)
        if not atoms:
            raise ConstructionError("A molecule needs at least one atom")
        for atom in atoms:
            if not isinstance(atom, Atom):
                raise ConstructionError(f"Molecule members must be Atoms, got {atom!r}")
        object.__setattr__(self, "atoms", atoms)

    @classmethod
    def of(cls, *atomic_numbers: int) -> "Molecule":
        """Build a molecule from atomic numbers, e.g. ``Molecule.of(1, 1, 1)``."""
        return cls(tuple(Atom.from_atomic_number(n) for n in atomic_numbers))

    def __len__(self) -> int:
        return len(self.atoms)

    def __iter__(self) -> Iterator[Atom]:
        return iter(self.atoms)


# A substituent is either a single atom or an ordered molecule
Particle = Union[Atom, Molecule]


def particle_atoms(particle: Particle) -> Iterator[Atom]:
    """Iterate over every atom of a particle.

    Args:
        particle: A single Atom or a Molecule.

    Yields:
        The atom itself, or the molecule's atoms in order.
    """
    if isinstance(particle, Atom):
        yield particle
    elif isinstance(particle, Molecule):
        yield from particle.atoms
    else:
        raise TypeError(f"Not a particle: {particle!r}")


@dataclass(eq=False, slots=True)
class Compound:
    """A node of a compound graph.

    Compounds are created and mutated through their CompoundGraph, which
    keeps side-chain links reciprocal. Equality is identity: two nodes with
    the same content are still different nodes.

    Attributes:
        idx: Stable index of this node in its graph.
        center: The center atom.
        substituents: Particles attached to the center, in attachment order.
        side_chains: Indices of linked neighbor nodes, in link order.
    """

    idx: int
    center: Atom
    substituents: list[Particle] = field(default_factory=list)
    side_chains: list[int] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def degree(self) -> int:
        """Number of side-chain links."""
        return len(self.side_chains)

    @property
    def is_busy(self) -> bool:
        """Whether a mutation currently holds this node."""
        return self._lock.locked()

    def neighbors(self, graph: "CompoundGraph") -> Iterator["Compound"]:
        """Iterate over linked neighbor nodes.

        Args:
            graph: Graph owning this node.

        Yields:
            Neighbor compounds in link order.
        """
        for neighbor_idx in self.side_chains:
            yield graph[neighbor_idx]

    def substituent_atoms(self) -> Iterator[Atom]:
        """Iterate over every atom held in the substituents."""
        for particle in self.substituents:
            yield from particle_atoms(particle)

    def condensed_formula(self, graph: "CompoundGraph") -> str:
        """Condensed formula of everything reachable from this node."""
        from chemchain.formula import condensed_formula
        return condensed_formula(graph, self.idx)


@dataclass(frozen=True, slots=True)
class Leaf:
    """A single compound in a builder result."""

    compound: Compound

    def __iter__(self) -> Iterator[Compound]:
        from chemchain.chain.flatten import flatten
        return iter(flatten(self))


@dataclass(frozen=True, slots=True)
class Chain:
    """An ordered sequence of builder results.

    Attributes:
        items: Nested Leaf or Chain values, in chain order.
    """

    items: tuple["Compounds", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __iter__(self) -> Iterator[Compound]:
        from chemchain.chain.flatten import flatten
        return iter(flatten(self))


# Result of ChainBuilder.build()
Compounds = Union[Leaf, Chain]
