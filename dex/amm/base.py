"""Base classes for AMM pricing implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SwapResult:
    """Result of pricing a swap against a pool snapshot."""

    amount_in: int
    amount_out: int
    pair: str
    asset_in: str
    asset_out: str


class AMM(ABC):
    """Abstract base class for AMM pricing curves.

    Implementations may extend the base method signatures with additional
    parameters. The constant-product curve adds a rational fee
    (fee_num, fee_den) to get_amount_out() and get_amount_in().
    """

    @abstractmethod
    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount for a given input.

        Args:
            amount_in: Input asset amount
            reserve_in: Reserve of input asset in pool
            reserve_out: Reserve of output asset in pool

        Returns:
            Output asset amount
        """
        ...

    @abstractmethod
    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate required input for a desired output.

        Args:
            amount_out: Desired output asset amount
            reserve_in: Reserve of input asset in pool
            reserve_out: Reserve of output asset in pool

        Returns:
            Required input asset amount
        """
        ...

    @abstractmethod
    def quote(self, amount_a: int, reserve_a: int, reserve_b: int) -> int:
        """Convert amount_a into the equivalent amount of the other asset at the pool ratio."""
        ...
