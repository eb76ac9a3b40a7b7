#!/usr/bin/env python3
"""
Simulated Trading Session

Runs a deterministic paper-trading session: starts a ledger with the given
capital, buys each symbol at its generated price, marks the portfolio to the
next simulated quote, prints indicator snapshots and portfolio metrics, and
optionally saves the ledger snapshot for later sessions.
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from quantsim.core.constants import (
    DEFAULT_HISTORY_DAYS,
    DEFAULT_INITIAL_CAPITAL,
    MAX_INITIAL_CAPITAL,
    MIN_INITIAL_CAPITAL,
)
from quantsim.core.exceptions.ledger import LedgerException
from quantsim.core.models.portfolio import PortfolioLedger
from quantsim.core.utils.validation import validate_initial_capital
from quantsim.infrastructure.data.price_providers import RandomWalkPriceProvider
from quantsim.infrastructure.data.technical_indicators import indicator_snapshot
from quantsim.infrastructure.storage.json_snapshot_store import JsonSnapshotStore


class SessionSimulator:
    """Drives one scripted session against a ledger and a price provider."""

    def __init__(
        self,
        ledger: PortfolioLedger,
        provider: RandomWalkPriceProvider,
        history_days: int = DEFAULT_HISTORY_DAYS,
    ):
        self.ledger = ledger
        self.provider = provider
        self.history_days = history_days

    def run(self, symbols: list[str], shares: int) -> None:
        """Buy, revalue and report for every symbol."""
        for symbol in symbols:
            history = self.provider.history(symbol, self.history_days)
            price = round(history[-1], 2)
            snapshot = indicator_snapshot(history)
            logger.info(
                f"{symbol}: price={price:.2f} rsi={snapshot.rsi:.2f} ({snapshot.rsi_zone}) "
                f"macd={snapshot.macd.macd:.3f} sma20={snapshot.sma20:.2f} "
                f"bollinger=[{snapshot.bollinger.lower:.2f}, {snapshot.bollinger.upper:.2f}]"
            )

            try:
                self.ledger.execute_trade(symbol, "BUY", shares, price)
            except LedgerException as e:
                logger.warning(f"Skipping {symbol}: {e}")
                continue
            self.ledger.add_to_watchlist(symbol)

        quotes = {symbol: round(self.provider.next_price(symbol), 2) for symbol in symbols}
        self.ledger.revalue_positions(quotes)

    def report(self) -> None:
        """Log positions, totals and metrics."""
        for position in self.ledger.positions.values():
            logger.info(
                f"{position.symbol}: {position.shares} @ {position.avg_price:.2f} "
                f"-> {position.current_price:.2f} "
                f"value={position.market_value:.2f} return={position.total_return_percent:.2f}%"
            )

        summary = self.ledger.summary
        logger.info(
            f"Cash={summary.cash:.2f} total={summary.total_value:.2f} "
            f"return={summary.total_return:.2f} ({summary.total_return_percent:.2f}%)"
        )

        metrics = self.ledger.get_portfolio_metrics()
        logger.info(
            f"Cash-flow ratio={metrics.sharpe_ratio:.3f} volatility={metrics.volatility:.2f}"
        )


def setup_logging(debug: bool = False):
    """Configure logging with loguru."""
    logger.remove()

    level = "DEBUG" if debug else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )


def main():
    parser = argparse.ArgumentParser(
        description="Run a simulated paper-trading session",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python simulate_session.py --symbols AAPL MSFT --shares 10
  python simulate_session.py --capital 50000 --seed 7 --snapshot data/ledger.json
  python simulate_session.py --snapshot data/ledger.json --resume
        """,
    )

    parser.add_argument(
        "--symbols",
        nargs="+",
        default=["AAPL", "MSFT", "GOOGL"],
        help="Symbols to trade (default: AAPL MSFT GOOGL)",
    )

    parser.add_argument(
        "--shares", type=int, default=10, help="Shares to buy per symbol (default: 10)"
    )

    parser.add_argument(
        "--capital",
        type=float,
        default=float(DEFAULT_INITIAL_CAPITAL),
        help=(
            f"Starting capital between {MIN_INITIAL_CAPITAL} and {MAX_INITIAL_CAPITAL} "
            f"(default: {DEFAULT_INITIAL_CAPITAL})"
        ),
    )

    parser.add_argument(
        "--base-price", type=float, default=150.0, help="Starting price of every walk"
    )

    parser.add_argument("--seed", type=int, default=42, help="Random walk seed (default: 42)")

    parser.add_argument(
        "--days",
        type=int,
        default=DEFAULT_HISTORY_DAYS,
        help=f"History length for indicators (default: {DEFAULT_HISTORY_DAYS})",
    )

    parser.add_argument("--snapshot", type=str, help="JSON file to save the ledger snapshot to")

    parser.add_argument(
        "--resume", action="store_true", help="Continue from the ledger saved in --snapshot"
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    setup_logging(args.debug)

    store = JsonSnapshotStore(Path(args.snapshot)) if args.snapshot else None

    try:
        ledger = store.load() if store is not None and args.resume else None
        if ledger is None or not ledger.is_initialized:
            capital = validate_initial_capital(args.capital)
            ledger = ledger or PortfolioLedger()
            ledger.initialize(capital)
        else:
            logger.info(f"Resumed ledger from {store.path}")

        provider = RandomWalkPriceProvider(
            base_prices={symbol: args.base_price for symbol in args.symbols},
            seed=args.seed,
        )
        simulator = SessionSimulator(ledger, provider, history_days=args.days)
        simulator.run(args.symbols, args.shares)
        simulator.report()

        if store is not None:
            store.save(ledger)
            logger.success(f"Saved ledger snapshot to {store.path}")

        return 0

    except LedgerException as e:
        logger.error(f"Session failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
