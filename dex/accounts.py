"""In-memory account balances.

The core moves value only as Coin objects. AccountBook is where those
coins come from and go back to for callers that hold balances by name
(the HTTP API): withdraw turns a balance into a Coin, deposit consumes a
Coin back into a balance.
"""

from __future__ import annotations

import threading
from collections import defaultdict

import structlog

from dex.assets import Coin, validate_amount, validate_asset_name
from dex.errors import InsufficientBalance, InvalidParameter, ZeroAmount
from dex.safe_int import U64_MAX

logger = structlog.get_logger()


class AccountBook:
    """Per-account, per-asset balances guarded by a single lock."""

    def __init__(self) -> None:
        self._balances: dict[str, dict[str, int]] = defaultdict(dict)
        self._lock = threading.Lock()

    @staticmethod
    def _check_account(account: str) -> str:
        if not isinstance(account, str) or not account:
            raise InvalidParameter(f"Account must be a non-empty string, got {account!r}")
        return account

    def _add(self, account: str, asset: str, amount: int) -> int:
        balance = self._balances[account].get(asset, 0) + amount
        if balance > U64_MAX:
            raise InvalidParameter(f"Balance of {asset} for {account} would exceed u64")
        self._balances[account][asset] = balance
        return balance

    def credit(self, account: str, asset: str, amount: int) -> int:
        """Add newly issued funds to an account.

        Issuance is the job of whatever sits outside the exchange; this is
        its hook.

        Returns:
            The new balance
        """
        self._check_account(account)
        validate_asset_name(asset)
        if validate_amount(amount) == 0:
            raise ZeroAmount("Credit amount must be positive")
        with self._lock:
            balance = self._add(account, asset, amount)
        logger.info("account_credited", account=account, asset=asset, amount=amount, balance=balance)
        return balance

    def deposit(self, account: str, coin: Coin) -> int:
        """Consume a coin into an account balance.

        Returns:
            The new balance
        """
        self._check_account(account)
        with self._lock:
            if self._balances.get(account, {}).get(coin.asset, 0) + coin.value > U64_MAX:
                raise InvalidParameter(f"Balance of {coin.asset} for {account} would exceed u64")
            balance = self._add(account, coin.asset, coin.consume())
        return balance

    def withdraw(self, account: str, asset: str, amount: int) -> Coin:
        """Take amount of asset out of an account as a Coin.

        Raises:
            InsufficientBalance: If the account holds less than amount
        """
        self._check_account(account)
        validate_asset_name(asset)
        validate_amount(amount)
        with self._lock:
            balance = self._balances.get(account, {}).get(asset, 0)
            if balance < amount:
                raise InsufficientBalance(
                    f"Account {account} holds {balance} of {asset}, needs {amount}"
                )
            self._balances[account][asset] = balance - amount
        return Coin(asset, amount)

    def balance_of(self, account: str, asset: str) -> int:
        with self._lock:
            return self._balances.get(account, {}).get(asset, 0)

    def balances(self, account: str) -> dict[str, int]:
        """Non-zero balances of an account, sorted by asset."""
        with self._lock:
            held = self._balances.get(account, {})
            return {asset: held[asset] for asset in sorted(held) if held[asset] > 0}


_accounts: AccountBook | None = None
_accounts_lock = threading.Lock()


def get_default_accounts() -> AccountBook:
    """Process-wide account book, created on first use."""
    global _accounts
    with _accounts_lock:
        if _accounts is None:
            _accounts = AccountBook()
        return _accounts


def reset_default_accounts() -> None:
    """Drop the process-wide account book. For tests only."""
    global _accounts
    with _accounts_lock:
        _accounts = None


__all__ = ["AccountBook", "get_default_accounts", "reset_default_accounts"]
