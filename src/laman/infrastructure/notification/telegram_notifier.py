"""Telegram adapter for new-order notifications.

Posts an HTML message to the Bot API ``sendMessage`` method.  Transport
errors and non-2xx answers surface as NotificationError; the create-order
use case logs them and moves on.
"""

from __future__ import annotations

import html
from decimal import Decimal

import httpx

from laman.application.notifications import NewOrderNotice, OrderNotifier
from laman.domain.exceptions import NotificationError

DEFAULT_API_BASE = "https://api.telegram.org"
DEFAULT_TIMEOUT = 5.0


class TelegramNotifier(OrderNotifier):

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        client: httpx.Client | None = None,
        api_base: str = DEFAULT_API_BASE,
    ) -> None:
        if not bot_token or not chat_id:
            raise ValueError("Telegram bot token and chat id are required")
        self._bot_token = bot_token
        self._chat_id = chat_id
        self._client = client
        self._api_base = api_base.rstrip("/")

    def notify_order_created(self, notice: NewOrderNotice) -> None:
        payload = {
            "chat_id": self._chat_id,
            "text": build_order_message(notice),
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }
        url = f"{self._api_base}/bot{self._bot_token}/sendMessage"
        try:
            if self._client is not None:
                response = self._client.post(url, json=payload)
            else:
                with httpx.Client(timeout=DEFAULT_TIMEOUT) as client:
                    response = client.post(url, json=payload)
        except httpx.HTTPError as exc:
            raise NotificationError(f"Telegram request failed: {exc}") from exc

        if not response.is_success:
            raise NotificationError(
                f"Telegram API returned {response.status_code}: {response.text}"
            )


def build_order_message(notice: NewOrderNotice) -> str:
    order = notice.order.order
    lines = [
        ("🆕 Новый заказ", f"<code>{_escape(_short_id(str(order.id)))}</code>"),
        ("👤 Клиент:", _escape(notice.customer or "Гость")),
        ("📞 Телефон:", _escape(notice.phone or "—")),
        ("📝 Комментарий:", _escape(notice.comment or "—")),
        ("📍 Адрес:", _escape(notice.address or "—")),
        ("💰 Итого:", _escape(format_money(order.final_total.amount))),
        ("📦 Товары:", _escape(notice.items or "—")),
        ("⏰ Время:", _escape(order.created_at.astimezone().strftime("%H:%M"))),
    ]
    return "\n".join(f"<b>{label}</b> {value}" for label, value in lines)


def format_money(amount: Decimal) -> str:
    """Whole amounts drop the kopecks: 462 -> "462₽", 462.5 -> "462.50₽"."""
    if amount == amount.to_integral_value():
        return f"{amount:.0f}₽"
    return f"{amount:.2f}₽"


def _short_id(order_id: str) -> str:
    return order_id[:8]


def _escape(value: str) -> str:
    return html.escape(value, quote=False)
