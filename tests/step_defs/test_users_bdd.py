"""
BDD step definitions for the users feature (pytest-bdd).
Only steps that need no database; CRUD behaviour is covered in test_users_api.py.
"""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import parsers, scenarios, then, when

from app.main import app

scenarios("../features/users.feature")


@pytest.fixture
def api() -> TestClient:
    return TestClient(app)


@pytest.fixture
def response():
    """Store last response for then steps."""
    return {}


@when(parsers.parse('I send "{method}" to "{path}"'))
def send_request(api, response, method, path):
    response["last"] = api.request(method, path)


@then(parsers.parse("the response status should be {code:d}"))
def status_is(response, code):
    assert response["last"].status_code == code


@then(parsers.parse('the "{name}" header should be "{value}"'))
def header_is(response, name, value):
    assert response["last"].headers[name] == value


@then(parsers.parse('the response body should have "{key}" equals "{value}"'))
def body_field_is(response, key, value):
    assert response["last"].json().get(key) == value
