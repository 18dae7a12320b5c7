"""
Custom exceptions for the chemchain library.

Every error raised by the compound graph and the chain builder derives from
ChemError, so callers can catch the whole family at once.
"""

from __future__ import annotations


class ChemError(Exception):
    """Base exception for all chemistry-related errors."""

    pass


class ConstructionError(ChemError, ValueError):
    """Invalid input while constructing atoms, particles or chains.

    Raised for atomic numbers outside 1..118, negative neutron or electron
    counts, and non-positive chain or branch lengths.
    """

    pass


class ChainError(ChemError):
    """Base class for misuse of a ChainBuilder session."""

    pass


class UnconfiguredParentChainError(ChainError):
    """A branch or build was requested before any parent chain existed."""

    def __init__(self, message: str = "Parent chain not configured; call chain() first") -> None:
        self.message = message
        super().__init__(message)


class InvalidLocantError(ChainError):
    """A locant does not address a realized atom of the parent chain.

    Attributes:
        locant: The rejected 1-based locant.
        chain_length: Length of the parent chain at the time of the call.
    """

    def __init__(self, locant: object, chain_length: int) -> None:
        self.locant = locant
        self.chain_length = chain_length
        super().__init__(
            f"Invalid locant {locant!r}: expected an integer in [1, {chain_length}]"
        )


class BuilderConsumedError(ChainError):
    """The builder session was already consumed by build()."""

    pass


class MutationConflictError(ChemError):
    """A compound node is already under an overlapping mutation.

    Attributes:
        idx: Index of the busy compound in its graph.
    """

    def __init__(self, idx: int, message: str | None = None) -> None:
        self.idx = idx
        self.message = message or f"Compound {idx} is already being mutated"
        super().__init__(self.message)


class ChainInvariantError(ChemError, RuntimeError):
    """Internal builder state is inconsistent.

    This signals a defect in the builder itself, not bad user input.
    """

    pass
