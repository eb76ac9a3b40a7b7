"""
Portfolio metrics and calculations.

The statistics here are deliberately simplified. They are computed from the
signed cash flow of each transaction (buys negative, sells positive), not
from time-weighted portfolio returns, and the ratio ignores any risk-free
rate. Treat them as an illustration of trading activity rather than a risk
measure. Max drawdown and beta need a portfolio value history that the ledger
does not keep, so they are reported as fixed placeholders.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from quantsim.core.constants import PLACEHOLDER_BETA, PLACEHOLDER_MAX_DRAWDOWN
from quantsim.core.types.financial import to_float

if TYPE_CHECKING:
    from .portfolio_core import PortfolioLedgerCore


@dataclass(frozen=True)
class PortfolioMetricsResult:
    """Simplified risk statistics of a ledger's trading activity."""

    sharpe_ratio: float
    volatility: float
    average_cash_flow: float
    variance: float
    max_drawdown: float = PLACEHOLDER_MAX_DRAWDOWN
    beta: float = PLACEHOLDER_BETA

    def to_dict(self) -> dict[str, float]:
        """Convert metrics to a plain dictionary."""
        return {
            "sharpe_ratio": self.sharpe_ratio,
            "volatility": self.volatility,
            "average_cash_flow": self.average_cash_flow,
            "variance": self.variance,
            "max_drawdown": self.max_drawdown,
            "beta": self.beta,
        }


class PortfolioMetrics:
    """Portfolio metrics calculations over the transaction log."""

    def __init__(self, ledger_core: "PortfolioLedgerCore") -> None:
        """Initialize with ledger core state.

        Args:
            ledger_core: The ledger core state to calculate metrics for
        """
        self.core = ledger_core

    def cash_flows(self) -> np.ndarray:
        """Signed cash flow of every transaction, newest first."""
        with self.core.lock:
            flows = [to_float(transaction.cash_flow) for transaction in self.core.transactions]
        return np.asarray(flows, dtype=float)

    def calculate(self) -> PortfolioMetricsResult:
        """Compute mean, population variance and mean/sigma of the cash flows.

        Returns:
            Metrics; all zero when no transaction was recorded
        """
        flows = self.cash_flows()
        if flows.size == 0:
            return PortfolioMetricsResult(
                sharpe_ratio=0.0, volatility=0.0, average_cash_flow=0.0, variance=0.0
            )

        average = float(np.mean(flows))
        variance = float(np.var(flows))  # population variance (ddof=0)
        volatility = float(np.sqrt(variance))
        ratio = 0.0 if volatility == 0.0 else average / volatility

        return PortfolioMetricsResult(
            sharpe_ratio=ratio,
            volatility=volatility,
            average_cash_flow=average,
            variance=variance,
        )
