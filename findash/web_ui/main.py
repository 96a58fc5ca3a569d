"""NiceGUI entrypoint for the findash dashboard."""

from __future__ import annotations

import argparse
import logging
from typing import Callable

from nicegui import Client, ui

from findash.adapters.bank_mock import demo_bank
from findash.app.controller import DashboardController, build_controller
from findash.app.session import DisconnectGrace
from findash.app.settings import DashboardSettings
from findash.utils.logging import configure_root
from findash.viewmodels.cards_vm import CardsVM
from findash.viewmodels.dashboard_vm import DashboardVM
from findash.viewmodels.transactions_vm import TransactionsVM

LOGGER = logging.getLogger(__name__)

ControllerFactory = Callable[[], DashboardController]

# Sessions close only after NiceGUI's reconnect window has passed.
RECONNECT_TIMEOUT_S = 3.0
SESSION_CLOSE_GRACE_S = RECONNECT_TIMEOUT_S + 2.0


def _install_theme() -> None:
    """Install global CSS tokens for the dashboard page."""
    ui.add_head_html(
        """
<style>
:root {
  --fd-bg-a: #0f172a;
  --fd-bg-b: #020617;
  --fd-card: rgba(255, 255, 255, 0.05);
  --fd-border: rgba(255, 255, 255, 0.10);
  --fd-muted: rgba(255, 255, 255, 0.60);
  --fd-debit: #fda4af;
  --fd-credit: #6ee7b7;
}
body {
  background: linear-gradient(to bottom, var(--fd-bg-a), var(--fd-bg-a), var(--fd-bg-b));
  color: white;
}
.fd-page { max-width: 1200px; margin: 0 auto; padding: 24px; }
.fd-card {
  background: var(--fd-card);
  border: 1px solid var(--fd-border);
  border-radius: 24px;
}
.fd-muted { color: var(--fd-muted); }
.fd-debit { color: var(--fd-debit); }
.fd-credit { color: var(--fd-credit); }
.fd-payment-card { border-radius: 24px; min-height: 160px; color: white; }
</style>
        """
    )


def _build_ui(controller_factory: ControllerFactory) -> None:
    """Register the dashboard page; every visit is a fresh session."""

    @ui.page("/")
    async def index(client: Client) -> None:
        _install_theme()
        controller = controller_factory()
        dashboard_vm = DashboardVM()
        cards_vm = CardsVM()
        tx_vm = TransactionsVM()
        dirty = {"value": True}

        def mark_dirty(_: DashboardController) -> None:
            dirty["value"] = True

        @ui.refreshable
        def render_stats() -> None:
            with ui.row().classes("w-full q-gutter-md"):
                for tile in dashboard_vm.tiles():
                    with ui.column().classes("fd-card p-4 col"):
                        ui.label(tile.label).classes("fd-muted text-sm")
                        ui.label(tile.value).classes("text-h5")
            ui.label(dashboard_vm.user_label).classes("fd-muted text-caption")

        @ui.refreshable
        def render_cards() -> None:
            with ui.column().classes("fd-card w-full p-6"):
                with ui.row().classes("w-full justify-between items-center"):
                    ui.label(cards_vm.title).classes("text-h6")
                placeholder = cards_vm.placeholder()
                if placeholder:
                    ui.label(placeholder).classes("fd-muted")
                    return
                with ui.row().classes("w-full q-gutter-md"):
                    for row in cards_vm.rows():
                        with ui.column().classes("fd-payment-card p-5 justify-between").style(
                            f"background: {row.background}; min-width: 280px"
                        ):
                            with ui.row().classes("w-full justify-between"):
                                ui.label(row.brand).classes("text-sm")
                                ui.label(row.status).classes("text-xs")
                            ui.label(row.masked_number).classes("text-lg")
                            ui.label(row.cardholder).classes("text-xs")

        @ui.refreshable
        def render_transactions() -> None:
            with ui.column().classes("fd-card w-full p-6"):
                ui.label(tx_vm.title).classes("text-h6")
                placeholder = tx_vm.placeholder()
                if placeholder:
                    ui.label(placeholder).classes("fd-muted")
                    return
                for row in tx_vm.rows():
                    with ui.row().classes("w-full justify-between items-center py-3"):
                        with ui.column().classes("gap-0"):
                            ui.label(row.description)
                            ui.label(row.occurred_at).classes("fd-muted text-xs")
                        tone = "fd-debit" if row.tone == "negative" else "fd-credit"
                        ui.label(row.amount).classes(tone)

        def flush() -> None:
            if not dirty["value"]:
                return
            dirty["value"] = False
            dashboard_vm.apply(
                controller.stats,
                user_id=controller.user_id,
                stats_error=controller.stats_error,
            )
            cards_vm.apply(controller.cards_state)
            tx_vm.apply(controller.transactions_state)
            render_stats.refresh()
            render_cards.refresh()
            render_transactions.refresh()

        grace = DisconnectGrace(controller.aclose, grace_s=SESSION_CLOSE_GRACE_S)

        controller.on_change(mark_dirty)
        client.on_connect(grace.connected)
        client.on_disconnect(grace.disconnected)

        with ui.column().classes("fd-page w-full q-gutter-lg"):
            with ui.row().classes("w-full justify-between items-center"):
                with ui.column().classes("gap-1"):
                    ui.label("Your Money, Beautifully Organized").classes("text-h4")
                    ui.label(
                        "Track balances, cards, and transactions in one place."
                    ).classes("fd-muted")
                ui.button("Refresh", on_click=lambda: controller.refresh()).props("flat color=white")
            render_stats()
            render_cards()
            render_transactions()
            ui.label("Fintech Dashboard - demo").classes("fd-muted text-center w-full")

        ui.timer(0.25, flush)
        controller.start()


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the findash NiceGUI dashboard.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--api-base-url", default=None, help="Overrides FINDASH_API_BASE_URL.")
    parser.add_argument("--mock", action="store_true", help="Serve seeded in-memory data.")
    parser.add_argument("--reload", action="store_true")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args()
    configure_root()
    settings = DashboardSettings.from_env().with_base_url(args.api_base_url)

    if args.mock:
        bank = demo_bank()

        def factory() -> DashboardController:
            return DashboardController(bank, transactions_limit=settings.transactions_limit)

        LOGGER.info("Serving dashboard from in-memory demo data")
    else:

        def factory() -> DashboardController:
            return build_controller(settings)

        LOGGER.info("Serving dashboard against %s", settings.api_base_url)

    _build_ui(factory)
    ui.run(
        host=args.host,
        port=args.port,
        title="Fintech Dashboard",
        reload=args.reload,
        reconnect_timeout=RECONNECT_TIMEOUT_S,
        show=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
