"""
Hydrogen saturation.

This module fills the free valences of compound centers with hydrogen
substituents, turning a bare carbon skeleton into a saturated compound.
"""

from __future__ import annotations

import logging
import warnings
from typing import Iterable

from chemchain.elements import HYDROGEN, get_default_valence
from chemchain.exceptions import MutationConflictError
from chemchain.graph import CompoundGraph
from chemchain.types import Atom, Compound, Molecule, Particle

logger = logging.getLogger(__name__)


def _is_hydrogen_group(particle: Particle) -> bool:
    return isinstance(particle, Molecule) and all(
        atom.atomic_number == HYDROGEN for atom in particle
    )


def used_valence(compound: Compound) -> int:
    """Count the valence already used at a compound's center.

    Each side chain and each substituent uses one bond, except a molecule
    made only of hydrogens (a condensed "Hn" group), which uses one bond
    per hydrogen.

    Args:
        compound: The compound to inspect.

    Returns:
        Number of bonds to the center.
    """
    used = compound.degree
    for particle in compound.substituents:
        used += len(particle) if _is_hydrogen_group(particle) else 1
    return used


def free_valence(compound: Compound) -> int | None:
    """Get the number of hydrogens needed to saturate a compound's center.

    Follows the same rule as implicit hydrogens: default valence minus
    used bonds, adjusted by the center's formal charge.

    Returns:
        Free valence (possibly negative), or None for elements without a
        default valence.
    """
    center = compound.center
    default_val = get_default_valence(center.atomic_number)
    if default_val is None:
        return None
    return default_val - used_valence(compound) + center.charge


def add_hydrogens(
    graph: CompoundGraph,
    nodes: Iterable[int | Compound] | None = None,
) -> int:
    """Saturate compound centers with hydrogen substituents.

    Every selected compound with free valence gets one substituent holding
    the missing hydrogens: a single Atom for one hydrogen, otherwise a
    Molecule of hydrogens. Compounds whose element has no default valence
    are skipped.

    Args:
        graph: Graph owning the compounds.
        nodes: Compounds or indices to saturate; a builder result can be
            passed directly. Defaults to every compound of the graph.

    Returns:
        Number of hydrogen atoms added.

    Raises:
        MutationConflictError: If a selected compound is being mutated.
            Every selected compound is checked before any is changed, so
            a conflict found up front adds no hydrogens. A node taken by
            another thread after that check still aborts the loop part-way,
            leaving the earlier compounds saturated.

    Example:
        >>> builder = ChainBuilder()
        >>> builder.chain(2)
        >>> tree = builder.build()
        >>> add_hydrogens(builder.graph, tree)
        6
    """
    if nodes is None:
        nodes = list(graph)

    compounds = [node if isinstance(node, Compound) else graph[node] for node in nodes]
    for compound in compounds:
        if compound.is_busy:
            raise MutationConflictError(compound.idx)

    added = 0
    for compound in compounds:
        free = free_valence(compound)
        if free is None or free == 0:
            continue
        if free < 0:
            warnings.warn(
                f"Compound {compound.idx} ({compound.center.symbol}) exceeds its "
                f"default valence by {-free}; no hydrogens added"
            )
            continue

        if free == 1:
            particle: Particle = Atom.from_atomic_number(HYDROGEN)
        else:
            particle = Molecule.of(*([HYDROGEN] * free))
        graph.add_substituent(compound.idx, particle)
        added += free

    logger.debug("Added %d hydrogens", added)
    return added
