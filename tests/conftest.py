from urllib.parse import urlsplit

import pytest

from mock_api import create_app
from settings import Settings

_NOT_JSON = object()


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400  # same as requests.Response.ok

    def json(self):
        if self._payload is _NOT_JSON:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    """Replays canned responses keyed by (method, path) and records requests."""
    def __init__(self, routes=None, error=None):
        self.routes = routes or {}
        self.error = error
        self.calls = []

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        if self.error is not None:
            raise self.error
        return self.routes[(method, urlsplit(url).path)]


class FlaskSession:
    """Routes client requests into the mock API's Flask test client."""
    def __init__(self, app):
        self.client = app.test_client()

    def request(self, method, url, timeout=None, json=None):
        resp = self.client.open(urlsplit(url).path, method=method, json=json)
        payload = resp.get_json(silent=True)
        return FakeResponse(resp.status_code, _NOT_JSON if payload is None else payload)


@pytest.fixture
def not_json():
    return _NOT_JSON


@pytest.fixture
def fast_settings():
    return Settings(splash_delay=0, patients_delay=0, form_error_seconds=3.0)


@pytest.fixture
def mock_app():
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def flask_session(mock_app):
    return FlaskSession(mock_app)


def patient_payload(pid, seconds, nanoseconds=0, nombre="Ana"):
    return {
        "id": pid,
        "nombre": nombre,
        "sintomaId": 1,
        "nivelDolor": 5,
        "fecha": {"_seconds": seconds, "_nanoseconds": nanoseconds},
        "sintomaNombre": "Fever",
    }


@pytest.fixture
def make_patient():
    return patient_payload
