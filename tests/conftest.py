import pytest
import requests


GAMES401_URL = "https://store.401games.ca/collections/all-pokemon-pre-orders"
DECKOUT_URL = "https://deckoutgaming.ca/collections/pokemon-sealed-pre-orders"


def games401_tile(title, price="$59.99", stock="Pre-order", href=None):
    href = href or "/products/" + title.lower().replace(" ", "-")
    return f"""
    <div class="product-item">
      <a class="product-item__title" href="{href}">{title}</a>
      <span class="price">{price}</span>
      <span class="product-item__inventory">{stock}</span>
    </div>
    """


def games401_page(*tiles, extra=""):
    return f"""
    <html>
      <head><script>window.__session = "abc";</script><style>.x{{}}</style></head>
      <body>
        <div class="timestamp">Rendered 2024-01-01T00:00:00Z</div>
        <div class="collection-grid">{''.join(tiles)}</div>
        {extra}
      </body>
    </html>
    """


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Records requests; returns queued responses or raises queued exceptions."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.gets = []
        self.posts = []
        self.closed = False

    def _next(self):
        item = self.responses.pop(0) if self.responses else FakeResponse(204)
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url, **kwargs):
        self.gets.append((url, kwargs))
        return self._next()

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs))
        return self._next()

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession()
