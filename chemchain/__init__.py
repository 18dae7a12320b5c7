"""
Chemchain - Pure Python compound graphs and chain skeleton builder.

A zero-dependency library for assembling organic compounds as graphs of
bonded atom groups and rendering their condensed formulas.

    >>> from chemchain import ChainBuilder, add_hydrogens, condensed_formula
    >>> builder = ChainBuilder()
    >>> builder.chain(5)
    >>> builder.chain_at(2, 1)
    >>> tree = builder.build()
    >>> add_hydrogens(builder.graph)
    14
    >>> condensed_formula(builder.graph, 0)
    'C6H14'

Submodules:
    chemchain.chain     - Chain builder and flattening
    chemchain.transform - Hydrogen saturation
"""

__version__ = "0.1.0"

# Core types
from chemchain.types import Atom, Chain, Compound, Compounds, Leaf, Molecule, Particle, particle_atoms
from chemchain.graph import CompoundGraph

# Building and formulas
from chemchain.chain import ChainBuilder, flatten
from chemchain.formula import AtomCounter, condensed_formula, format_formula
from chemchain.transform import add_hydrogens

# Exceptions
from chemchain.exceptions import (
    BuilderConsumedError,
    ChainError,
    ChainInvariantError,
    ChemError,
    ConstructionError,
    InvalidLocantError,
    MutationConflictError,
    UnconfiguredParentChainError,
)

# Element data
from chemchain.elements import Element, get_element, get_symbol

# Submodules
from chemchain import chain, transform

__all__ = [
    # Types
    "Atom", "Molecule", "Particle", "particle_atoms",
    "Compound", "CompoundGraph", "Leaf", "Chain", "Compounds",
    # Building
    "ChainBuilder", "flatten", "add_hydrogens",
    # Formulas
    "AtomCounter", "condensed_formula", "format_formula",
    # Exceptions
    "ChemError", "ConstructionError", "ChainError",
    "UnconfiguredParentChainError", "InvalidLocantError",
    "BuilderConsumedError", "MutationConflictError", "ChainInvariantError",
    # Elements
    "Element", "get_element", "get_symbol",
    # Submodules
    "chain", "transform",
]
