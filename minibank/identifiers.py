"""
Account Number Generation

Generators produce account numbers that do not collide with numbers already
registered. The ledger passes an is_taken predicate so generators never need
to know about the ledger itself.
"""

import random
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .exceptions import AccountNumberExhaustedError


IsTaken = Callable[[str], bool]

NUMBER_MIN = 100000
NUMBER_MAX = 999999


class AccountNumberGenerator(ABC):
    """Abstract source of fresh account numbers"""

    @abstractmethod
    def next_number(self, is_taken: IsTaken) -> str:
        """Return an account number for which is_taken() is False"""
        pass


class RandomAccountNumberGenerator(AccountNumberGenerator):
    """
    Prefix followed by a random 6-digit number, retried on collision
    """

    def __init__(self, prefix: str = "AC", rng: Optional[random.Random] = None,
                 max_attempts: int = 1000):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.prefix = prefix
        self.max_attempts = max_attempts
        self._rng = rng or random.Random()

    def next_number(self, is_taken: IsTaken) -> str:
        for _ in range(self.max_attempts):
            candidate = f"{self.prefix}{self._rng.randint(NUMBER_MIN, NUMBER_MAX)}"
            if not is_taken(candidate):
                return candidate
        raise AccountNumberExhaustedError(
            f"No free account number found after {self.max_attempts} attempts"
        )


class SequentialAccountNumberGenerator(AccountNumberGenerator):
    """Deterministic numbers (AC100000, AC100001, ...) for tests and demos"""

    def __init__(self, prefix: str = "AC", start: int = NUMBER_MIN):
        self.prefix = prefix
        self._next = start

    def next_number(self, is_taken: IsTaken) -> str:
        while self._next <= NUMBER_MAX:
            candidate = f"{self.prefix}{self._next}"
            self._next += 1
            if not is_taken(candidate):
                return candidate
        raise AccountNumberExhaustedError("Sequential account numbers exhausted")
