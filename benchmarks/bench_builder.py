#!/usr/bin/env python3
"""
Benchmark skeleton building and formula computation against RDKit.

For each skeleton, chemchain builds the chain, saturates it with hydrogens
and renders the condensed formula; RDKit parses the equivalent SMILES and
computes its molecular formula.

Usage:
    python benchmarks/bench_builder.py [--extended]

Options:
    --extended    Also run long chains with many branches
"""

import sys
import os
import time
from dataclasses import dataclass
from typing import Optional

# Ensure local chemchain is used (not installed version)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _comb(length: int, every: int) -> tuple[list[tuple[int, ...]], str]:
    """A parent chain with a methyl branch on every ``every``-th locant."""
    calls: list[tuple[int, ...]] = [(length,)]
    smiles = []
    for locant in range(1, length + 1):
        smiles.append("C")
        if locant % every == 0:
            calls.append((locant, 1))
            smiles.append("(C)")
    return calls, "".join(smiles)


# Name -> (builder calls, equivalent SMILES)
SKELETONS = {
    "isooctane": ([(5,), (2, 1), (2, 1), (4, 1)], "CC(C)(C)CC(C)C"),
    "c20_comb": _comb(20, 3),
    "c60_comb": _comb(60, 2),
}

EXTENDED_SKELETONS = {
    "c200_comb": _comb(200, 2),
    "c500_linear": ([(500,)], "C" * 500),
}

ITERATIONS = 500
EXTENDED_ITERATIONS = 50


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    formula: str
    time_seconds: float
    iterations: int
    num_atoms: int

    @property
    def time_per_call_ms(self) -> float:
        return (self.time_seconds / self.iterations) * 1000

    @property
    def time_per_atom_us(self) -> float:
        """Microseconds per heavy atom per call."""
        return (self.time_seconds / self.iterations / self.num_atoms) * 1_000_000


def _chemchain_formula(calls: list[tuple[int, ...]]) -> tuple[str, int]:
    from chemchain import ChainBuilder, add_hydrogens, condensed_formula

    builder = ChainBuilder()
    for call in calls:
        if len(call) == 1:
            builder.chain(*call)
        else:
            builder.chain_at(*call)
    builder.build()
    add_hydrogens(builder.graph)
    return condensed_formula(builder.graph, 0), builder.size


def benchmark_chemchain(calls: list[tuple[int, ...]], iterations: int) -> BenchmarkResult:
    """Benchmark chemchain build + saturation + formula."""
    formula, num_atoms = _chemchain_formula(calls)  # warmup

    start = time.perf_counter()
    for _ in range(iterations):
        _chemchain_formula(calls)
    end = time.perf_counter()

    return BenchmarkResult(formula, end - start, iterations, num_atoms)


def benchmark_rdkit(smiles: str, iterations: int) -> BenchmarkResult:
    """Benchmark RDKit parse + formula."""
    from rdkit import Chem
    from rdkit.Chem.rdMolDescriptors import CalcMolFormula

    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit failed to parse SMILES: {smiles}")
    formula = CalcMolFormula(mol)

    start = time.perf_counter()
    for _ in range(iterations):
        CalcMolFormula(Chem.MolFromSmiles(smiles))
    end = time.perf_counter()

    return BenchmarkResult(formula, end - start, iterations, mol.GetNumAtoms())


def run(skeletons: dict, iterations: int) -> None:
    header = f"{'Skeleton':<14} {'Atoms':>6} {'Formula':>12} {'chemchain ms':>13} {'RDKit ms':>10} {'Ratio':>8} {'µs/atom':>9}"
    print(header)
    print("-" * len(header))

    for name, (calls, smiles) in skeletons.items():
        ours = benchmark_chemchain(calls, iterations)
        theirs: Optional[BenchmarkResult] = None
        try:
            theirs = benchmark_rdkit(smiles, iterations)
        except ImportError:
            pass

        if theirs is not None:
            if theirs.formula != ours.formula:
                print(f"{name:<14} FORMULA MISMATCH: {ours.formula} != {theirs.formula}")
                continue
            ratio = f"{ours.time_seconds / theirs.time_seconds:.2f}x"
            rdkit_ms = f"{theirs.time_per_call_ms:.4f}"
        else:
            ratio = rdkit_ms = "N/A"

        print(f"{name:<14} "
              f"{ours.num_atoms:>6} "
              f"{ours.formula:>12} "
              f"{ours.time_per_call_ms:>13.4f} "
              f"{rdkit_ms:>10} "
              f"{ratio:>8} "
              f"{ours.time_per_atom_us:>9.2f}")


def main():
    print("=" * 78)
    print("Skeleton build + formula benchmark: chemchain vs RDKit")
    print("=" * 78)
    print(f"\nIterations: {ITERATIONS}\n")
    run(SKELETONS, ITERATIONS)

    if "--extended" in sys.argv or "-e" in sys.argv:
        print(f"\nExtended iterations: {EXTENDED_ITERATIONS}\n")
        run(EXTENDED_SKELETONS, EXTENDED_ITERATIONS)
    else:
        print("\nTIP: Run with --extended for long chains")


if __name__ == "__main__":
    main()
