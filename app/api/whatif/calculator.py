from app.api.market.models import EthPrice, NativeCoinChange

from .models import CoinComparison, EthPortfolio


def build_portfolio(balance: float, eth_price: EthPrice) -> EthPortfolio:
    return EthPortfolio(
        balance=balance,
        current_price=eth_price.current,
        month_ago_price=eth_price.month_ago,
        value_month_ago=balance * eth_price.month_ago,
        current_value=balance * eth_price.current,
        price_change=eth_price.change,
    )


def process_coin_comparison(
    coin: NativeCoinChange, portfolio: EthPortfolio, eth_change: float
) -> CoinComparison:
    """
    Compare holding ETH for the last 30 days with having converted the
    month-ago value into the coin instead.
    """
    token_change = coin.price_change_30d
    initial_value = portfolio.value_month_ago

    eth_value = initial_value * (1 + eth_change / 100)
    token_value = initial_value * (1 + token_change / 100)

    return CoinComparison(
        coin=coin.name,
        symbol=coin.symbol,
        potential_gain=token_value - eth_value,
        actual_gain=token_change,
        price_change=token_change,
        eth_change=eth_change,
        token_change=token_change,
        eth_winner=token_change <= eth_change,
    )


def sort_comparisons(comparisons: list[CoinComparison]) -> list[CoinComparison]:
    """Gainers first, biggest gain first, then the rest, biggest loss first."""
    gainers = [c for c in comparisons if c.actual_gain > 0]
    others = [c for c in comparisons if c.actual_gain <= 0]

    return sorted(gainers, key=lambda c: c.actual_gain, reverse=True) + sorted(
        others, key=lambda c: c.actual_gain
    )


def compare_coins(
    coins: list[NativeCoinChange], portfolio: EthPortfolio
) -> list[CoinComparison]:
    comparisons = [
        process_coin_comparison(coin, portfolio, portfolio.price_change)
        for coin in coins
        if coin.price_change_30d is not None
    ]
    return sort_comparisons(comparisons)
