"""API endpoints for the exchange.

Each mutating endpoint withdraws the coins it needs from the caller's
account, runs the entry operation, and deposits every resulting coin back.
If the operation fails, the untouched input coins go back to the account
unchanged.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog
from fastapi import APIRouter, Depends, Query

from dex.accounts import AccountBook, get_default_accounts
from dex.assets import Coin, pair_key, sort_assets
from dex.errors import InvalidParameter
from dex.exchange import Exchange, get_default_exchange
from dex.models.requests import (
    AddLiquidityRequest,
    CreditRequest,
    RemoveLiquidityRequest,
    SetFeeRequest,
    SwapExactInRequest,
    SwapExactOutRequest,
)
from dex.models.responses import (
    AccountBalances,
    AddLiquidityResponse,
    FeeUpdateResponse,
    PoolInfo,
    PoolList,
    RemoveLiquidityResponse,
    SwapResponse,
)

logger = structlog.get_logger()

router = APIRouter()


def get_exchange() -> Exchange:
    """Dependency provider for the exchange.

    Override this in tests to inject an exchange over a private registry:
        app.dependency_overrides[get_exchange] = lambda: Exchange(PoolRegistry())
    """
    return get_default_exchange()


def get_accounts() -> AccountBook:
    """Dependency provider for the account book."""
    return get_default_accounts()


@contextmanager
def _wallet(accounts: AccountBook, account: str) -> Iterator[Callable[[str, int], Coin]]:
    """Yield a withdraw function; unspent withdrawn coins are returned on exit."""
    taken: list[Coin] = []

    def take(asset: str, amount: int) -> Coin:
        coin = accounts.withdraw(account, asset, amount)
        taken.append(coin)
        return coin

    try:
        yield take
    finally:
        for coin in taken:
            if not coin.consumed:
                accounts.deposit(account, coin)


# =============================================================================
# Pools
# =============================================================================


@router.get("/pools")
async def list_pools(exchange: Exchange = Depends(get_exchange)) -> PoolList:
    """List all registered pools."""
    return PoolList(pools=[PoolInfo.from_snapshot(s) for s in exchange.list_pools()])


@router.get("/pools/{asset_x}/{asset_y}")
async def get_pool(
    asset_x: str,
    asset_y: str,
    exchange: Exchange = Depends(get_exchange),
) -> PoolInfo:
    """Current state of the pool for (asset_x, asset_y), in either order."""
    return PoolInfo.from_snapshot(exchange.get_pool(asset_x, asset_y))


@router.get("/pools/{asset_in}/{asset_out}/quote")
async def quote(
    asset_in: str,
    asset_out: str,
    amount_in: int | None = Query(default=None, ge=1),
    amount_out: int | None = Query(default=None, ge=1),
    exchange: Exchange = Depends(get_exchange),
) -> SwapResponse:
    """Price a swap without executing it.

    Exactly one of amount_in (exact-input) or amount_out (exact-output)
    must be given.
    """
    if (amount_in is None) == (amount_out is None):
        raise InvalidParameter("Give exactly one of amount_in or amount_out")
    if amount_in is not None:
        result = exchange.quote_exact_in(asset_in, asset_out, amount_in)
    else:
        result = exchange.quote_exact_out(asset_in, asset_out, amount_out)
    return SwapResponse.from_result(result)


@router.post("/pools/{asset_x}/{asset_y}/liquidity")
async def add_liquidity(
    asset_x: str,
    asset_y: str,
    request: AddLiquidityRequest,
    exchange: Exchange = Depends(get_exchange),
    accounts: AccountBook = Depends(get_accounts),
) -> AddLiquidityResponse:
    """Deposit both assets from the account; shares and refunds go back to it."""
    logger.info(
        "received_add_liquidity",
        account=request.account,
        asset_x=asset_x,
        asset_y=asset_y,
        amount_x=request.amount_x,
        amount_y=request.amount_y,
    )
    with _wallet(accounts, request.account) as take:
        coin_x = take(asset_x, request.amount_x)
        coin_y = take(asset_y, request.amount_y)
        deposit = exchange.add_liquidity(coin_x, request.min_x, coin_y, request.min_y)

    pair = deposit.liquidity.asset
    for coin in (deposit.liquidity, deposit.refund_a, deposit.refund_b):
        accounts.deposit(request.account, coin)

    return AddLiquidityResponse(
        pair=pair,
        consumed_x=deposit.report.consumed_a,
        consumed_y=deposit.report.consumed_b,
        minted=deposit.report.minted,
    )


@router.post("/pools/{asset_x}/{asset_y}/liquidity/remove")
async def remove_liquidity(
    asset_x: str,
    asset_y: str,
    request: RemoveLiquidityRequest,
    exchange: Exchange = Depends(get_exchange),
    accounts: AccountBook = Depends(get_accounts),
) -> RemoveLiquidityResponse:
    """Burn shares held by the account and credit both assets to it."""
    pair = pair_key(*sort_assets(asset_x, asset_y))
    with _wallet(accounts, request.account) as take:
        shares = take(pair, request.liquidity)
        coin_x, coin_y = exchange.remove_liquidity(asset_x, asset_y, shares)

    amount_x, amount_y = coin_x.value, coin_y.value
    accounts.deposit(request.account, coin_x)
    accounts.deposit(request.account, coin_y)
    return RemoveLiquidityResponse(
        pair=pair,
        burned=request.liquidity,
        amount_x=amount_x,
        amount_y=amount_y,
    )


@router.post("/pools/{asset_in}/{asset_out}/swap/exact-in")
async def swap_exact_in(
    asset_in: str,
    asset_out: str,
    request: SwapExactInRequest,
    exchange: Exchange = Depends(get_exchange),
    accounts: AccountBook = Depends(get_accounts),
) -> SwapResponse:
    """Sell exactly amount_in of asset_in for at least min_amount_out."""
    with _wallet(accounts, request.account) as take:
        coin_in = take(asset_in, request.amount_in)
        coin_out = exchange.swap_exact_in(coin_in, asset_out, request.min_amount_out)

    amount_out = coin_out.value
    accounts.deposit(request.account, coin_out)
    logger.info(
        "swap_exact_in_executed",
        account=request.account,
        asset_in=asset_in,
        asset_out=asset_out,
        amount_in=request.amount_in,
        amount_out=amount_out,
    )
    return SwapResponse(
        pair=pair_key(*sort_assets(asset_in, asset_out)),
        asset_in=asset_in,
        asset_out=asset_out,
        amount_in=request.amount_in,
        amount_out=amount_out,
    )


@router.post("/pools/{asset_in}/{asset_out}/swap/exact-out")
async def swap_exact_out(
    asset_in: str,
    asset_out: str,
    request: SwapExactOutRequest,
    exchange: Exchange = Depends(get_exchange),
    accounts: AccountBook = Depends(get_accounts),
) -> SwapResponse:
    """Buy exactly amount_out of asset_out, paying at most max_amount_in."""
    with _wallet(accounts, request.account) as take:
        coin_in = take(asset_in, request.max_amount_in)
        coin_out, leftover = exchange.swap_exact_out(coin_in, asset_out, request.amount_out)

    amount_in = request.max_amount_in - leftover.value
    accounts.deposit(request.account, coin_out)
    accounts.deposit(request.account, leftover)
    logger.info(
        "swap_exact_out_executed",
        account=request.account,
        asset_in=asset_in,
        asset_out=asset_out,
        amount_in=amount_in,
        amount_out=request.amount_out,
    )
    return SwapResponse(
        pair=pair_key(*sort_assets(asset_in, asset_out)),
        asset_in=asset_in,
        asset_out=asset_out,
        amount_in=amount_in,
        amount_out=request.amount_out,
    )


@router.post("/pools/{asset_x}/{asset_y}/fee")
async def set_fee(
    asset_x: str,
    asset_y: str,
    request: SetFeeRequest,
    exchange: Exchange = Depends(get_exchange),
) -> FeeUpdateResponse:
    """Set the pool's fee. Callers are assumed to be authorized upstream."""
    asset_a, asset_b = sort_assets(asset_x, asset_y)
    registered = exchange.registry.has_registered(asset_a, asset_b)
    exchange.set_fee(asset_x, asset_y, request.fee_numerator, request.fee_denominator)
    return FeeUpdateResponse(pair=pair_key(asset_a, asset_b), updated=registered)


# =============================================================================
# Accounts
# =============================================================================


@router.post("/accounts/{account}/credit")
async def credit_account(
    account: str,
    request: CreditRequest,
    accounts: AccountBook = Depends(get_accounts),
) -> AccountBalances:
    """Issue funds to an account."""
    accounts.credit(account, request.asset, request.amount)
    return AccountBalances(account=account, balances=accounts.balances(account))


@router.get("/accounts/{account}")
async def get_account(
    account: str,
    accounts: AccountBook = Depends(get_accounts),
) -> AccountBalances:
    """Non-zero balances of an account."""
    return AccountBalances(account=account, balances=accounts.balances(account))
