"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def source_user() -> dict[str, Any]:
    """Provide a nested user record used as a transformation source."""
    return {
        "firstName": "John",
        "lastName": "Doe",
        "age": 25,
        "email": "john.doe@example.com",
        "address": {
            "street": "123 Main St",
            "city": "New York",
            "country": "USA",
        },
    }


@pytest.fixture
def user_schema() -> list[dict[str, Any]]:
    """Provide a schema covering direct mappings and transform functions."""
    return [
        {"to": "fullName", "fn": lambda a: f"{a.source['firstName']} {a.source['lastName']}"},
        {"to": "userAge", "from": "age"},
        {"to": "contactEmail", "from": "email"},
        {
            "to": "location",
            "fn": lambda a: f"{a.source['address']['city']}, {a.source['address']['country']}",
        },
        {"to": "isAdult", "fn": lambda a: a.source["age"] >= 18},
    ]
