import datetime as dt

import requests

from preorder_monitor.extractor import ProductRecord
from preorder_monitor.notifier import build_alert_embed, send_change_alert

from conftest import DECKOUT_URL, GAMES401_URL, FakeResponse, FakeSession


WEBHOOK = "https://discord.com/api/webhooks/1/abc"


def _products(n):
    return [
        ProductRecord(
            title=f"Booster Box {i}",
            price=f"${i}9.99",
            availability="Pre-order",
            link=f"https://store.401games.ca/products/box-{i}",
        )
        for i in range(1, n + 1)
    ]


def test_embed_caps_product_blocks_and_notes_the_rest():
    embed = build_alert_embed(GAMES401_URL, _products(8))

    product_fields = [f for f in embed["fields"] if f["name"].startswith("🎯 Product")]
    assert len(product_fields) == 5
    assert embed["fields"][-1]["value"] == "+ 3 more changes detected"
    assert len(embed["fields"]) == 2 + 5 + 1
    assert embed["description"] == "8 change(s) detected on 401 Games"


def test_embed_without_overflow_has_no_note():
    embed = build_alert_embed(DECKOUT_URL, _products(2))
    assert [f["name"] for f in embed["fields"]] == [
        "Website", "Timestamp", "🎯 Product 1", "🎯 Product 2",
    ]
    assert embed["fields"][0]["value"] == "Deck Out Gaming"


def test_embed_header_fields():
    now = dt.datetime(2024, 11, 8, 12, 30, tzinfo=dt.timezone.utc)
    embed = build_alert_embed(GAMES401_URL, _products(1), now=now)

    assert embed["title"] == "🚨 Pokemon Product Alert!"
    assert embed["color"] == 0x00FF00
    assert embed["fields"][1] == {"name": "Timestamp", "value": "2024-11-08T12:30:00+00:00", "inline": True}
    assert embed["footer"] == {"text": "Pokemon Pre-order Monitor"}


def test_product_block_omits_missing_details():
    embed = build_alert_embed(GAMES401_URL, [ProductRecord(title="Mystery Tin")])
    assert embed["fields"][2]["value"] == "**Mystery Tin**"

    full = build_alert_embed(GAMES401_URL, _products(1))["fields"][2]["value"]
    assert full.splitlines() == [
        "**Booster Box 1**",
        "💰 $19.99",
        "📦 Pre-order",
        "🔗 [View Product](https://store.401games.ca/products/box-1)",
    ]


def test_unknown_site_uses_hostname():
    embed = build_alert_embed("https://www.example.com/collections/tcg", _products(1))
    assert embed["fields"][0]["value"] == "example.com"


def test_send_posts_single_embed(fake_session):
    ok = send_change_alert(GAMES401_URL, _products(3), webhook_url=WEBHOOK, session=fake_session)

    assert ok is True
    assert len(fake_session.posts) == 1
    url, kwargs = fake_session.posts[0]
    assert url == WEBHOOK
    assert len(kwargs["json"]["embeds"]) == 1
    assert kwargs["json"]["embeds"][0]["description"] == "3 change(s) detected on 401 Games"
    assert fake_session.closed is False


def test_send_with_no_products_is_a_noop(fake_session):
    assert send_change_alert(GAMES401_URL, [], webhook_url=WEBHOOK, session=fake_session) is False
    assert fake_session.posts == []


def test_send_without_webhook_does_not_post(fake_session):
    assert send_change_alert(GAMES401_URL, _products(1), webhook_url="", session=fake_session) is False
    assert fake_session.posts == []


def test_send_failure_is_logged_not_raised(caplog):
    session = FakeSession([requests.ConnectionError("discord down")])
    assert send_change_alert(GAMES401_URL, _products(1), webhook_url=WEBHOOK, session=session) is False
    assert "Error sending Discord notification" in caplog.text


def test_send_rejected_status_is_a_failure():
    session = FakeSession([FakeResponse(status_code=429)])
    assert send_change_alert(GAMES401_URL, _products(1), webhook_url=WEBHOOK, session=session) is False
