"""Main Flet desktop application entry point."""

from __future__ import annotations

import logging
import time
from typing import Optional

import flet as ft

from ..config import BaseConfig
from ..logging_config import session_log_path, setup_logging
from .context import AppContext, create_app_context
from .views.ledger import build_ledger_view


def start_app(config: Optional[BaseConfig] = None) -> tuple[AppContext, logging.Logger]:
    """Install logging, then hydrate the ledger so load warnings reach the log file."""

    config = config or BaseConfig()
    logger = setup_logging(config)
    ctx = create_app_context(config)
    logger.info(
        "PocketLedger desktop application starting",
        extra={"transactions": len(ctx.store), "theme": ctx.theme.current.value},
    )
    return ctx, logger


def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    ctx, logger = start_app()

    ctx.page = page
    page.title = "PocketLedger (DEV)" if ctx.dev_mode else "PocketLedger"
    page.theme_mode = ctx.theme_mode
    page.padding = 0
    page.window.width = 1100
    page.window.height = 760
    page.window.min_width = 720
    page.window.min_height = 560

    view = build_ledger_view(ctx, page)

    def on_page_close(_):
        view.data.detach()
        slp = session_log_path()
        logger.info("Application closing", extra={"session_log": str(slp) if slp else None})

    page.on_close = on_page_close

    # Flet can emit the same error many times per second; log each message once per burst
    last_error: dict[str, object] = {"message": None, "at": 0.0, "suppressed": 0}

    def on_error(e: ft.ControlEvent):  # pragma: no cover (UI callback)
        msg = getattr(e, "data", None) or "<no-data>"
        now = time.time()
        if last_error["message"] == msg and now - float(last_error["at"]) < 0.5:
            last_error["suppressed"] = int(last_error["suppressed"]) + 1
            last_error["at"] = now
            return
        if last_error["suppressed"]:
            logger.warning(
                "Repeated Flet errors suppressed",
                extra={"event": "error_suppressed", "error_message": last_error["message"],
                       "suppressed": last_error["suppressed"]},
            )
        last_error.update(message=msg, at=now, suppressed=0)
        logger.error("Flet page error", extra={"event": "error", "data": msg})

    page.on_error = on_error

    page.views.clear()
    page.views.append(view)
    page.update()


def run() -> None:
    """Console-script entry: open the desktop window."""
    ft.app(target=main)


if __name__ == "__main__":
    run()
