"""Tests for notification rendering and sink selection"""

import json

import httpx
import pytest

from lunch.notifications import LoggingNotificationSink, TelegramNotificationSink, get_notification_sink
from lunch.notifications.base import format_group_order, format_lobby_cancelled
from lunch.schemas.group_order import GroupOrderLine, GroupOrderNotification


def test_format_group_order():
    notification = GroupOrderNotification(
        restaurant_chat_id=555001,
        restaurant_name="Trattoria",
        building_name="Coworking",
        delivery_slot="13:00",
        group_order_id=12,
        orders=[
            GroupOrderLine(id=1, user_id=10, total_price=100, items=[{"name": "Soup", "quantity": 2}]),
            GroupOrderLine(id=2, user_id=11, total_price=150.5, items=[{"name": "Pasta"}]),
        ],
        total_amount=250.5,
        participant_count=2,
    )

    text = format_group_order(notification)

    assert text.startswith("Group order #12")
    assert "Building: Coworking" in text
    assert "Delivery slot: 13:00" in text
    assert "Participants: 2" in text
    assert "Total: 250.50" in text
    assert "Order #1 (user 10) - 100.00" in text
    assert "  - Soup x2" in text
    assert "  - Pasta x1" in text


def test_format_lobby_cancelled():
    assert "18:45" in format_lobby_cancelled("18:45")


def test_logging_sink_without_token(monkeypatch):
    from lunch.config import settings

    monkeypatch.setattr(settings, "telegram_bot_token", "")
    assert isinstance(get_notification_sink(), LoggingNotificationSink)

    monkeypatch.setattr(settings, "telegram_bot_token", "123:abc")
    assert isinstance(get_notification_sink(), TelegramNotificationSink)


def _recording_transport(requests, status_code=200):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json={"ok": status_code == 200})

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_telegram_long_message_is_chunked():
    """5000 characters go out as two sendMessage calls"""
    requests = []
    sink = TelegramNotificationSink(
        token="123:abc",
        api_base="https://telegram.test/",
        transport=_recording_transport(requests),
    )

    await sink.send_message(555001, "x" * 5000)

    assert len(requests) == 2
    bodies = [json.loads(r.content) for r in requests]
    assert all(r.url.host == "telegram.test" for r in requests)
    assert all(r.url.path == "/bot123:abc/sendMessage" for r in requests)
    assert [b["chat_id"] for b in bodies] == [555001, 555001]
    assert [len(b["text"]) for b in bodies] == [4096, 904]


@pytest.mark.asyncio
async def test_telegram_lobby_notice_goes_to_user():
    requests = []
    sink = TelegramNotificationSink(token="123:abc", transport=_recording_transport(requests))

    await sink.notify_lobby_cancelled(401, "13:00")

    body = json.loads(requests[0].content)
    assert body["chat_id"] == 401
    assert "13:00" in body["text"]


@pytest.mark.asyncio
async def test_telegram_error_response_raises():
    requests = []
    sink = TelegramNotificationSink(token="123:abc", transport=_recording_transport(requests, 500))

    with pytest.raises(httpx.HTTPStatusError):
        await sink.send_message(555001, "hello")

    assert len(requests) == 1
