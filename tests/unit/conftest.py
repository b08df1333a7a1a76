"""Conftest for unit tests - marks every test as a unit test and shares sample collections."""

import pytest


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def fruits():
    return ["apple pie", "banana split", "apple tart"]


@pytest.fixture
def people():
    return {
        "ann": {"name": "Ann Smith", "age": 31, "city": "Oslo"},
        "bob": {"name": "Bob Jones", "age": 17, "city": "Bergen"},
        "cid": {"name": "Cid Smith", "age": 45, "city": "Oslo"},
    }


@pytest.fixture
def rows():
    return [
        ["red", "apple", 3],
        ["green", "apple", 5],
        ["yellow", "banana", 7],
    ]
