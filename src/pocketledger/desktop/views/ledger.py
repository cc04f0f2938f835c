"""Ledger screen: entry form, summary cards, chart, and transaction list."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ...errors import ValidationError
from ...logging_config import get_logger
from ...models.transaction import Theme, Transaction, TransactionKind
from ...services.aggregates import Aggregates, compute_aggregates
from ...services.ledger_store import LedgerStore, Snapshot
from ...services.money import format_amount
from ..charts import ChartProjector, income_expense_chart_png
from ..components import build_stat_card, empty_state

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

EMPTY_MESSAGE = "No transactions yet."
INCOME_COLOR = ft.Colors.GREEN_400
EXPENSE_COLOR = ft.Colors.RED_400


class LedgerProjector:
    """Renders store snapshots into a list container and summary texts.

    Every store mutation triggers a full rebuild of the list. The only write
    this class performs is forwarding a row's delete click to the store.
    """

    def __init__(
        self,
        store: LedgerStore,
        *,
        currency: str = "",
        chart: Optional[ChartProjector] = None,
        refresh: Optional[Callable[[], None]] = None,
    ):
        self.store = store
        self.currency = currency
        self.chart = chart
        self._refresh = refresh
        self.list_view = ft.Column(spacing=8)
        self.income_text = ft.Text(self._fmt(0))
        self.expense_text = ft.Text(self._fmt(0))
        self.balance_text = ft.Text(self._fmt(0))
        self.aggregates = Aggregates()
        self._detachers: list[Callable[[], None]] = [store.subscribe(self.render)]

    def _fmt(self, value) -> str:
        return format_amount(value, self.currency)

    def render(self, snapshot: Optional[Snapshot] = None) -> None:
        if snapshot is None:
            snapshot = self.store.list()
        if snapshot:
            self.list_view.controls = [self._build_row(tx) for tx in snapshot]
        else:
            self.list_view.controls = [empty_state(EMPTY_MESSAGE)]
        self._render_summary(compute_aggregates(snapshot))
        if self._refresh is not None:
            self._refresh()

    def _render_summary(self, aggregates: Aggregates) -> None:
        self.aggregates = aggregates
        self.income_text.value = self._fmt(aggregates.income)
        self.expense_text.value = self._fmt(aggregates.expense)
        self.balance_text.value = self._fmt(aggregates.balance)
        self.balance_text.color = EXPENSE_COLOR if aggregates.balance_cents < 0 else None
        if self.chart is not None:
            totals = aggregates.as_dict()
            self.chart.update(totals["income"], totals["expense"])

    def delete(self, transaction_id: str) -> bool:
        return self.store.remove(transaction_id)

    def _build_row(self, tx: Transaction) -> ft.Container:
        color = INCOME_COLOR if tx.is_income else EXPENSE_COLOR
        indicator = ft.Container(
            content=ft.Text("+" if tx.is_income else "-", size=18, weight=ft.FontWeight.BOLD, color=color),
            width=36,
            height=36,
            alignment=ft.alignment.center,
            border_radius=18,
            bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        )
        details = ft.Column(
            [
                ft.Text(tx.label, size=15, weight=ft.FontWeight.W_600),
                ft.Text(tx.date, size=12, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            spacing=2,
            expand=True,
        )
        delete_button = ft.IconButton(
            icon=ft.Icons.DELETE_OUTLINE,
            tooltip="Delete transaction",
            data=tx.id,
            on_click=lambda _e, tx_id=tx.id: self.delete(tx_id),
        )
        return ft.Container(
            content=ft.Row(
                [
                    indicator,
                    details,
                    ft.Text(self._fmt(tx.amount), color=color, weight=ft.FontWeight.BOLD),
                    delete_button,
                ],
                vertical_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            padding=ft.padding.symmetric(horizontal=12, vertical=8),
            border_radius=8,
            data=tx.id,
        )

    def on_detach(self, callback: Callable[[], None]) -> None:
        self._detachers.append(callback)

    def detach(self) -> None:
        while self._detachers:
            self._detachers.pop()()
        if self.chart is not None:
            self.chart.close()


def build_ledger_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the single ledger screen bound to ``ctx.store`` and ``ctx.theme``."""

    currency = ctx.config.CURRENCY

    def _notify(message: str) -> None:
        page.snack_bar = ft.SnackBar(content=ft.Text(message))
        page.snack_bar.open = True
        page.update()

    chart_image = ft.Image(src="", width=420, height=320)
    chart = ChartProjector(chart_image, renderer=partial(income_expense_chart_png, currency=currency))
    projector = LedgerProjector(ctx.store, currency=currency, chart=chart, refresh=page.update)

    kind_field = ft.Dropdown(
        label="Type",
        options=[
            ft.dropdown.Option(TransactionKind.INCOME.value, "Income"),
            ft.dropdown.Option(TransactionKind.EXPENSE.value, "Expense"),
        ],
        value=TransactionKind.EXPENSE.value,
        width=150,
    )
    amount_field = ft.TextField(label="Amount", hint_text="0.00", width=150)
    date_field = ft.TextField(label="Date", hint_text="YYYY-MM-DD", width=160)
    category_field = ft.TextField(label="Category", hint_text="Salary, Groceries...", width=220)

    def _reset_form() -> None:
        kind_field.value = TransactionKind.EXPENSE.value
        amount_field.value = ""
        amount_field.error_text = None
        date_field.value = ""
        category_field.value = ""

    def submit(_e) -> None:
        try:
            tx = ctx.store.add(
                kind_field.value or TransactionKind.EXPENSE.value,
                amount_field.value,
                date_field.value,
                category_field.value,
            )
        except ValidationError as exc:
            logger.info("Transaction rejected", extra={"field": exc.field, "reason": str(exc)})
            amount_field.error_text = str(exc) if exc.field == "amount" else None
            _notify(f"Please enter a valid amount greater than 0 ({exc})")
            return
        _reset_form()
        _notify(f"Added {tx.label}: {format_amount(tx.amount, currency)}")

    add_button = ft.FilledButton("Add", icon=ft.Icons.ADD, on_click=submit)

    theme_button = ft.IconButton(tooltip="Toggle theme", on_click=lambda _e: ctx.theme.toggle())

    def apply_theme(theme: Theme) -> None:
        page.theme_mode = ft.ThemeMode.LIGHT if theme is Theme.LIGHT else ft.ThemeMode.DARK
        theme_button.icon = ft.Icons.LIGHT_MODE if theme is Theme.LIGHT else ft.Icons.DARK_MODE
        page.update()

    projector.on_detach(ctx.theme.on_apply(apply_theme))
    ctx.theme.apply_current()

    summary = ft.ResponsiveRow(
        [
            ft.Container(
                build_stat_card("Balance", projector.balance_text, icon=ft.Icons.ACCOUNT_BALANCE_WALLET),
                col={"sm": 12, "md": 4},
            ),
            ft.Container(
                build_stat_card("Income", projector.income_text, icon=ft.Icons.TRENDING_UP, color=INCOME_COLOR),
                col={"sm": 12, "md": 4},
            ),
            ft.Container(
                build_stat_card("Expenses", projector.expense_text, icon=ft.Icons.TRENDING_DOWN, color=EXPENSE_COLOR),
                col={"sm": 12, "md": 4},
            ),
        ]
    )

    form = ft.Card(
        content=ft.Container(
            content=ft.Row(
                [kind_field, amount_field, date_field, category_field, add_button],
                wrap=True,
                spacing=12,
            ),
            padding=16,
        ),
        elevation=2,
    )

    body = ft.Row(
        [
            ft.Container(
                content=ft.Column(
                    [ft.Text("Transactions", size=18, weight=ft.FontWeight.BOLD), projector.list_view],
                    spacing=12,
                ),
                expand=True,
            ),
            ft.Container(content=chart_image, padding=8),
        ],
        vertical_alignment=ft.CrossAxisAlignment.START,
    )

    projector.render()

    view = ft.View(
        route="/",
        appbar=ft.AppBar(title=ft.Text("PocketLedger"), actions=[theme_button]),
        controls=[ft.Column([summary, form, body], spacing=16)],
        scroll=ft.ScrollMode.AUTO,
        padding=20,
    )
    view.data = projector
    return view

