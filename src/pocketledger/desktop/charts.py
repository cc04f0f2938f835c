"""Income/expense bar chart rendered with matplotlib for a flet Image."""

from __future__ import annotations

from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Callable, Optional

import flet as ft
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker

from ..logging_config import get_logger

logger = get_logger(__name__)

INCOME_COLOR = "#22C55E"
EXPENSE_COLOR = "#EF4444"

ChartRenderer = Callable[[float, float], Path]


def income_expense_chart_png(income: float, expense: float, *, currency: str = "") -> Path:
    """Render a two-bar Income/Expense chart and return the PNG path."""

    fig, ax = plt.subplots(figsize=(5, 4))
    try:
        bars = ax.bar(
            ["Income", "Expense"],
            [income, expense],
            color=[INCOME_COLOR, EXPENSE_COLOR],
            width=0.55,
        )
        ax.set_ylim(bottom=0)
        if income == 0 and expense == 0:
            ax.set_ylim(0, 1)
        ax.set_title(f"Amounts ({currency})" if currency else "Amounts", fontsize=12, fontweight="bold")
        ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: f"{x:,.0f}"))
        ax.grid(True, axis="y", linestyle="--", alpha=0.3)
        ax.set_axisbelow(True)
        for bar, value in zip(bars, (income, expense)):
            ax.annotate(
                f"{value:,.2f}",
                (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                textcoords="offset points",
                xytext=(0, 4),
                ha="center",
                fontsize=9,
            )
        fig.tight_layout()
        with NamedTemporaryFile(delete=False, suffix=".png") as tmp:
            fig.savefig(tmp.name, bbox_inches="tight", dpi=100)
            return Path(tmp.name)
    finally:
        plt.close(fig)


class ChartProjector:
    """Keeps a flet Image showing only the latest income/expense pair.

    Without an image target, or after a render failure, the projector goes
    inert; the ledger and its summary keep working.
    """

    def __init__(
        self,
        image: Optional[ft.Image],
        renderer: Optional[ChartRenderer] = None,
    ):
        self.image = image
        self._renderer = renderer or income_expense_chart_png
        self._path: Optional[Path] = None
        self.values: Optional[tuple[float, float]] = None
        self.available = image is not None
        if not self.available:
            logger.warning("No chart surface; chart disabled")

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def update(self, income: float, expense: float) -> None:
        if not self.available:
            return
        pair = (float(income), float(expense))
        if pair == self.values and self._path is not None:
            return
        try:
            new_path = self._renderer(*pair)
        except (RuntimeError, ValueError, OSError) as exc:
            self.available = False
            logger.warning(
                "Chart rendering failed; chart disabled",
                extra={"event": "chart_error", "reason": str(exc)},
            )
            return
        previous, self._path = self._path, new_path
        self.values = pair
        self.image.src = str(new_path)
        if previous is not None and previous != new_path:
            previous.unlink(missing_ok=True)

    def close(self) -> None:
        """Remove the last rendered file."""
        if self._path is not None:
            self._path.unlink(missing_ok=True)
            self._path = None


__all__ = ["ChartProjector", "income_expense_chart_png"]
