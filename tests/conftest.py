"""
Shared fakes for the test suite.
No test touches the network: LastFMClient gets a _FakeSession instead of requests.Session.
"""

import json

import pytest

from topartists import config as config_module
from topartists.models import Config


class _FakeResponse:
    def __init__(self, body, status_code=200):
        self._body = body
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._body, (dict, list)):
            return self._body
        return json.loads(self._body)  # json.JSONDecodeError is a ValueError, as with requests


class _FakeSession:
    """Records every GET and answers with a canned response (or raises `error`)."""

    def __init__(self, body=None, status_code=200, error=None):
        self.body = body
        self.status_code = status_code
        self.error = error
        self.calls = []

    def get(self, url, **kw):
        self.calls.append((url, kw))
        if self.error is not None:
            raise self.error
        return _FakeResponse(self.body, self.status_code)


def _make_response(*artists):
    """Build a user.gettopartists body from (name, playcount) pairs."""
    return {
        "topartists": {
            "artist": [{"name": name, "playcount": playcount} for name, playcount in artists],
            "@attr": {"user": "rj", "page": "1", "perPage": str(len(artists)), "totalPages": "1"},
        }
    }


@pytest.fixture
def fake_session():
    return _FakeSession


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def config():
    return Config(api_key="k3y", username="rj", limit=5, period="7day")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Empty environment, no dotfiles: only what the test sets is visible."""
    for name in config_module.ENV_VARS.values():
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "DOTFILE_PATH", str(tmp_path / "missing.env"))
    return tmp_path
