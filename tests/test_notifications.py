"""Tests for the notification scheduler"""
import asyncio
from unittest.mock import Mock

import pytest

from storefront.notifications import NotificationKind, NotificationScheduler


@pytest.mark.asyncio
async def test_enqueue_returns_unique_ids():
    scheduler = NotificationScheduler()

    ids = [scheduler.enqueue(f"message {i}") for i in range(5)]

    assert len(set(ids)) == 5
    scheduler.close()


@pytest.mark.asyncio
async def test_active_in_enqueue_order():
    scheduler = NotificationScheduler()

    scheduler.show_info("first")
    scheduler.show_warning("second")
    scheduler.show_error("third")

    assert [n.message for n in scheduler.active] == ["first", "second", "third"]
    assert [n.kind for n in scheduler.active] == [
        NotificationKind.INFO,
        NotificationKind.WARNING,
        NotificationKind.ERROR,
    ]
    scheduler.close()


@pytest.mark.asyncio
async def test_default_kind_and_duration():
    scheduler = NotificationScheduler()

    nid = scheduler.enqueue("Saved")
    notification = scheduler.active[0]

    assert notification.id == nid
    assert notification.kind is NotificationKind.SUCCESS
    assert notification.duration_ms == 3000
    scheduler.close()


@pytest.mark.asyncio
async def test_expires_after_duration_exactly_once():
    on_change = Mock()
    scheduler = NotificationScheduler(on_change=on_change)

    nid = scheduler.enqueue("Item removed from cart", duration_ms=20)
    assert nid in scheduler
    on_change.reset_mock()

    await asyncio.sleep(0.1)

    assert nid not in scheduler
    assert len(scheduler) == 0
    on_change.assert_called_once()


@pytest.mark.asyncio
async def test_not_removed_before_duration():
    scheduler = NotificationScheduler()

    nid = scheduler.enqueue("Still here", duration_ms=500)
    await asyncio.sleep(0.02)

    assert nid in scheduler
    scheduler.close()


@pytest.mark.asyncio
async def test_dismiss_before_expiry_then_timer_is_noop():
    on_change = Mock()
    scheduler = NotificationScheduler(on_change=on_change)
    nid = scheduler.enqueue("Dismiss me", duration_ms=20)
    keep = scheduler.enqueue("Keep me", duration_ms=1000)
    on_change.reset_mock()

    assert scheduler.dismiss(nid) is True
    await asyncio.sleep(0.1)

    assert [n.id for n in scheduler.active] == [keep]
    on_change.assert_called_once()
    scheduler.close()


@pytest.mark.asyncio
async def test_dismiss_unknown_or_twice_is_noop():
    scheduler = NotificationScheduler()
    nid = scheduler.enqueue("Once", duration_ms=1000)

    assert scheduler.dismiss(nid) is True
    assert scheduler.dismiss(nid) is False
    assert scheduler.dismiss(9999) is False


@pytest.mark.asyncio
async def test_dismiss_after_expiry_is_noop():
    scheduler = NotificationScheduler()
    nid = scheduler.enqueue("Gone", duration_ms=10)

    await asyncio.sleep(0.05)

    assert scheduler.dismiss(nid) is False


@pytest.mark.asyncio
async def test_rejects_non_positive_duration():
    scheduler = NotificationScheduler()

    with pytest.raises(ValueError):
        scheduler.enqueue("Never", duration_ms=0)
    assert len(scheduler) == 0


@pytest.mark.asyncio
async def test_close_cancels_pending_timers():
    on_change = Mock()
    scheduler = NotificationScheduler(on_change=on_change)
    scheduler.enqueue("a", duration_ms=20)
    scheduler.enqueue("b", duration_ms=20)
    on_change.reset_mock()

    scheduler.close()
    await asyncio.sleep(0.06)

    assert scheduler.active == []
    on_change.assert_called_once()


@pytest.mark.asyncio
async def test_schedulers_are_independent():
    catalog = NotificationScheduler()
    checkout = NotificationScheduler()

    catalog.show_success("Rose added to cart successfully! 🛒")

    assert len(catalog) == 1
    assert len(checkout) == 0
    catalog.close()


def test_enqueue_accepts_kind_string():
    loop = asyncio.new_event_loop()
    try:
        scheduler = NotificationScheduler(loop=loop)
        scheduler.enqueue("Heads up", kind="warning", duration_ms=1000)

        assert scheduler.active[0].kind is NotificationKind.WARNING
        scheduler.close()
    finally:
        loop.close()
