"""
Chemical elements and composition constants.

This module holds the periodic table used to validate atomic numbers and to
render element symbols in condensed formulas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Final

from chemchain.exceptions import ConstructionError


MIN_ATOMIC_NUMBER: Final[int] = 1
MAX_ATOMIC_NUMBER: Final[int] = 118

HYDROGEN: Final[int] = 1
CARBON: Final[int] = 6

# Elements written ahead of the ascending atomic-number tail of a formula
FORMULA_PRIORITY: Final[tuple[int, ...]] = (CARBON, HYDROGEN)


@dataclass(frozen=True, slots=True)
class Element:
    """Immutable element data.

    Attributes:
        atomic_number: Atomic number (proton count), 1 to 118.
        symbol: Element symbol (e.g., "C", "Cl").
        default_valence: Common valence for organic chemistry, if any.
    """

    atomic_number: int
    symbol: str
    default_valence: int | None = None

    # Class-level registry
    _by_symbol: ClassVar[dict[str, "Element"]] = {}
    _by_number: ClassVar[dict[int, "Element"]] = {}

    def __post_init__(self) -> None:
        Element._by_symbol[self.symbol] = self
        Element._by_number[self.atomic_number] = self

    @classmethod
    def from_symbol(cls, symbol: str) -> "Element | None":
        """Look up element by symbol ("cl" and "Cl" both give chlorine)."""
        if symbol in cls._by_symbol:
            return cls._by_symbol[symbol]
        return cls._by_symbol.get(symbol.capitalize())

    @classmethod
    def from_atomic_number(cls, num: int) -> "Element | None":
        """Look up element by atomic number."""
        return cls._by_number.get(num)


# Symbols in atomic-number order, one period per line
_SYMBOLS: Final[tuple[str, ...]] = (
    "H He "
    "Li Be B C N O F Ne "
    "Na Mg Al Si P S Cl Ar "
    "K Ca Sc Ti V Cr Mn Fe Co Ni Cu Zn Ga Ge As Se Br Kr "
    "Rb Sr Y Zr Nb Mo Tc Ru Rh Pd Ag Cd In Sn Sb Te I Xe "
    "Cs Ba La Ce Pr Nd Pm Sm Eu Gd Tb Dy Ho Er Tm Yb Lu "
    "Hf Ta W Re Os Ir Pt Au Hg Tl Pb Bi Po At Rn "
    "Fr Ra Ac Th Pa U Np Pu Am Cm Bk Cf Es Fm Md No Lr "
    "Rf Db Sg Bh Hs Mt Ds Rg Cn Nh Fl Mc Lv Ts Og"
).split()

# Default valences for hydrogen saturation
DEFAULT_VALENCES: Final[dict[int, int]] = {
    1: 1,   # H
    5: 3,   # B
    6: 4,   # C
    7: 3,   # N
    8: 2,   # O
    9: 1,   # F
    14: 4,  # Si
    15: 3,  # P
    16: 2,  # S
    17: 1,  # Cl
    35: 1,  # Br
    53: 1,  # I
}

ELEMENTS: Final[tuple[Element, ...]] = tuple(
    Element(num, sym, DEFAULT_VALENCES.get(num))
    for num, sym in enumerate(_SYMBOLS, start=MIN_ATOMIC_NUMBER)
)


def is_valid_atomic_number(atomic_num: object) -> bool:
    """Check that a value is an int atomic number within 1..118."""
    return (
        isinstance(atomic_num, int)
        and not isinstance(atomic_num, bool)
        and MIN_ATOMIC_NUMBER <= atomic_num <= MAX_ATOMIC_NUMBER
    )


def get_element(atomic_num: int) -> Element:
    """Get the element for an atomic number.

    Args:
        atomic_num: Atomic number (1 to 118).

    Returns:
        The matching Element.

    Raises:
        ConstructionError: If the atomic number is out of range.
    """
    if not is_valid_atomic_number(atomic_num):
        raise ConstructionError(
            f"Invalid atomic number {atomic_num!r}: expected an integer "
            f"in [{MIN_ATOMIC_NUMBER}, {MAX_ATOMIC_NUMBER}]"
        )
    return ELEMENTS[atomic_num - MIN_ATOMIC_NUMBER]


def get_symbol(atomic_num: int) -> str:
    """Get the element symbol for an atomic number.

    An out-of-range number is a caller defect, reported as ConstructionError.
    """
    return get_element(atomic_num).symbol


def get_atomic_number(symbol: str) -> int:
    """Get atomic number for an element symbol.

    Args:
        symbol: Element symbol (e.g., "C", "cl", "Cl").

    Returns:
        Atomic number, or 0 if not found.
    """
    elem = Element.from_symbol(symbol)
    return elem.atomic_number if elem else 0


def get_default_valence(atomic_num: int) -> int | None:
    """Get default valence for an element.

    Args:
        atomic_num: Atomic number.

    Returns:
        Default valence, or None if not applicable.
    """
    return DEFAULT_VALENCES.get(atomic_num)
