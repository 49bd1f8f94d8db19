"""Pytest fixtures for the contact API.

Provides:
- A fresh application per test backed by in-memory SQLite
- Test client and admin headers
- A factory that inserts contacts directly, with optional timestamps/status
- An adapter that lets the requests-based clients talk to the test client

Usage:
    def test_admin_stats(client, admin_headers):
        response = client.get("/api/admin/contacts/stats", headers=admin_headers)
        assert response.status_code == 200
"""

import json
from urllib.parse import urlsplit

import pytest

from app import create_app
from extensions import db
from models import Contact
from utils.security import reset_rate_limits

ADMIN_KEY = 'test-admin-key'


@pytest.fixture
def app():
    reset_rate_limits()
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
    reset_rate_limits()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers():
    return {'X-Admin-Key': ADMIN_KEY}


@pytest.fixture
def valid_payload():
    return {
        'name': 'Jane Doe',
        'email': 'jane@x.com',
        'message': 'Hello there, testing.'
    }


@pytest.fixture
def make_contact(app):
    """Insert a contact straight into the database"""
    def _make(**overrides):
        created_at = overrides.pop('created_at', None)
        status = overrides.pop('status', None)
        fields = {
            'name': 'Jane Doe',
            'email': 'jane@x.com',
            'subject': '',
            'message': 'Hello there, testing.',
            'ip_address': '127.0.0.1',
            'user_agent': 'pytest'
        }
        fields.update(overrides)
        contact = Contact(**fields)
        if status:
            contact.status = status
        if created_at:
            contact.created_at = created_at
            contact.updated_at = created_at
        db.session.add(contact)
        db.session.commit()
        return contact
    return _make


class FlaskResponse:
    """The parts of requests.Response the clients use"""

    def __init__(self, response):
        self.status_code = response.status_code
        self._text = response.get_data(as_text=True)

    def json(self):
        return json.loads(self._text)


class FlaskSession:
    """requests.Session stand-in that routes calls to the Flask test client"""

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append((method, url))
        response = self.test_client.open(
            urlsplit(url).path,
            method=method,
            query_string=params,
            json=json,
            headers=headers
        )
        return FlaskResponse(response)


@pytest.fixture
def flask_session(client):
    return FlaskSession(client)
