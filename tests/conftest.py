import pytest
import requests

class FakeResponse:
    def __init__(self, text="", status_code=200, body_error=None):
        self._text = text
        self.status_code = status_code
        self._body_error = body_error

    @property
    def text(self):
        if self._body_error is not None:
            raise self._body_error
        return self._text

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False

@pytest.fixture
def fake_get(monkeypatch):
    """
    Replace requests.get; ``pages`` maps URL -> FakeResponse (or an exception
    to raise). Every requested URL is recorded in ``calls``.
    """
    pages = {}
    calls = []

    def _get(url, **kwargs):
        calls.append(url)
        page = pages.get(url)
        if page is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(page, Exception):
            raise page
        return page

    monkeypatch.setattr(requests, "get", _get)
    _get.pages = pages
    _get.calls = calls
    return _get

@pytest.fixture
def slides_page():
    def _page(title, status_code=200):
        return FakeResponse(f"<html><head><title>{title}</title></head><body></body></html>", status_code)
    return _page
