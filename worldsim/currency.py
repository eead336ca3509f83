"""Money supply with a simple inflation model, and agent wallets."""

from dataclasses import dataclass


class InsufficientFundsError(ValueError):
    """Raised when a wallet cannot cover a withdrawal."""


@dataclass
class CurrencySystem:
    """World money supply, its inflation and transaction volume."""

    total_supply: float = 10000.0
    base_value: float = 1.0
    inflation_rate: float = 0.0
    deflation_events: int = 0
    transaction_count: int = 0

    def mint_currency(self, amount: float) -> None:
        """Put new money into circulation."""
        self.total_supply += amount
        self._recalculate_inflation()

    def burn_currency(self, amount: float) -> None:
        """Take money out of circulation; the supply never goes negative."""
        self.total_supply = max(self.total_supply - amount, 0.0)
        self.deflation_events += 1
        self._recalculate_inflation()

    def record_transaction(self, amount: float) -> None:
        """Count one transaction; the amount does not affect the model."""
        self.transaction_count += 1

    def _recalculate_inflation(self) -> None:
        base_inflation = 0.02
        supply_factor = (self.total_supply / 10000.0 - 1.0) * 0.05
        self.inflation_rate = base_inflation + supply_factor
        self.base_value *= 1.0 - self.inflation_rate * 0.001

    def purchasing_power(self) -> float:
        """Current value of one unit of currency."""
        return self.base_value

    def velocity(self) -> float:
        """Transactions per unit of money supply."""
        if self.total_supply > 0.0:
            return self.transaction_count / self.total_supply
        return 0.0


@dataclass
class Wallet:
    """An agent's money with lifetime totals."""

    balance: float = 100.0
    total_earned: float = 0.0
    total_spent: float = 0.0

    def deposit(self, amount: float) -> None:
        """Add ``amount`` to the balance."""
        self.balance += amount
        self.total_earned += amount

    def withdraw(self, amount: float) -> None:
        """Take ``amount`` out; raises InsufficientFundsError if it is not there."""
        if not self.can_afford(amount):
            raise InsufficientFundsError(
                f"cannot withdraw {amount}: balance is {self.balance}"
            )
        self.balance -= amount
        self.total_spent += amount

    def can_afford(self, amount: float) -> bool:
        """Whether the balance covers ``amount``."""
        return self.balance >= amount