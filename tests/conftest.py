"""Test configuration and fixtures for chemchain tests."""

import pytest

from chemchain import Atom, ChainBuilder, CompoundGraph


def rdkit_formula(smiles: str) -> str:
    """Get RDKit molecular formula for comparison.

    Args:
        smiles: Input SMILES string.

    Returns:
        RDKit's Hill-ordered molecular formula.
    """
    from rdkit import Chem
    from rdkit.Chem.rdMolDescriptors import CalcMolFormula

    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit could not parse: {smiles}")
    return CalcMolFormula(mol)


@pytest.fixture
def graph() -> CompoundGraph:
    """An empty compound graph."""
    return CompoundGraph()


@pytest.fixture
def carbon() -> Atom:
    return Atom.from_atomic_number(6)


@pytest.fixture
def hexane_builder() -> ChainBuilder:
    """Builder holding a six-carbon parent chain."""
    builder = ChainBuilder()
    builder.chain(6)
    return builder


@pytest.fixture
def alkane_skeletons() -> list[tuple[list[tuple[int, ...]], str]]:
    """Builder call sequences with the SMILES of the saturated alkane.

    Each call is ``(n,)`` for chain(n) or ``(locant, n)`` for chain_at.
    """
    return [
        ([(1,)], "C"),                            # methane
        ([(2,)], "CC"),                           # ethane
        ([(5,)], "CCCCC"),                        # pentane
        ([(5,), (2, 1)], "CC(C)CCC"),             # 2-methylpentane
        ([(4,), (2, 1), (3, 1)], "CC(C)C(C)C"),   # 2,3-dimethylbutane
        ([(3,), (2, 1), (2, 1)], "CC(C)(C)C"),    # neopentane
        ([(7,), (4, 2)], "CCCC(CC)CCC"),          # 4-ethylheptane
        ([(8,), (3, 3), (5, 1)], "CCC(CCC)CC(C)CCC"),
    ]
