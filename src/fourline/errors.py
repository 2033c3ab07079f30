# src/fourline/errors.py

from __future__ import annotations


class ContractViolation(ValueError):
    """A caller broke a precondition of the core (bad column, full board, ...)."""


class ColumnOutOfRangeError(ContractViolation):
    def __init__(self, col: int, cols: int) -> None:
        super().__init__(f"Column {col} out of range (0..{cols - 1}).")
        self.col = col


class ColumnFullError(ContractViolation):
    def __init__(self, col: int) -> None:
        super().__init__(f"Column {col} is full.")
        self.col = col


class CellMismatchError(ContractViolation):
    pass


class NoLegalMoveError(ContractViolation):
    def __init__(self) -> None:
        super().__init__("No legal moves.")


class NotBoundError(ContractViolation):
    def __init__(self) -> None:
        super().__init__("Agent has no side yet; call bind() first.")


class AlreadyBoundError(ContractViolation):
    pass


class GameOverError(ContractViolation):
    def __init__(self) -> None:
        super().__init__("Game is over; reset() before playing again.")
