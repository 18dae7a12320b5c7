"""Hydrogen saturation of compound skeletons."""

from chemchain.transform.hydrogen import add_hydrogens, free_valence, used_valence

__all__ = [
    "add_hydrogens",
    "free_valence",
    "used_valence",
]
