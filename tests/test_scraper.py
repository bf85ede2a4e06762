import pytest
import requests

from preorder_monitor.scraper import fetch_page
from preorder_monitor.utils import HTTPError

from conftest import GAMES401_URL, FakeResponse, FakeSession


def test_fetch_page_returns_html_with_timeout():
    session = FakeSession([FakeResponse(200, "<html>ok</html>")])

    html = fetch_page(GAMES401_URL, session=session, timeout=5)

    assert html == "<html>ok</html>"
    assert session.gets == [(GAMES401_URL, {"timeout": 5})]


def test_fetch_page_raises_on_error_status():
    session = FakeSession([FakeResponse(503, "unavailable")])
    with pytest.raises(HTTPError):
        fetch_page(GAMES401_URL, session=session)


def test_fetch_page_propagates_network_errors():
    session = FakeSession([requests.Timeout("read timed out")])
    with pytest.raises(requests.Timeout):
        fetch_page(GAMES401_URL, session=session)
    assert len(session.gets) == 1
