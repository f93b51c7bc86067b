"""
Shared fixtures: an app built around an empty in-memory store.

Usage:
  pytest tests/ -v
"""
import os
import sys
from datetime import timedelta

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app import create_app  # noqa: E402
from store import InMemoryEmailStore, to_iso, utc_now  # noqa: E402


@pytest.fixture
def store():
    return InMemoryEmailStore()


@pytest.fixture
def app(store):
    app = create_app(store=store, seed=False)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_email():
    """Raw ingest payload item, sent `minutes_ago` minutes before now."""
    def _make(sender='alice@example.com', subject='Need help', body='', minutes_ago=5):
        return {
            'sender': sender,
            'subject': subject,
            'body': body,
            'sent_date': to_iso(utc_now() - timedelta(minutes=minutes_ago)),
        }
    return _make
