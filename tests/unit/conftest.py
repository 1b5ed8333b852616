"""Unit-test fixtures."""

import pytest

from tests.unit.factories import FakeLedgerRepository


@pytest.fixture
def fake_repo() -> FakeLedgerRepository:
    return FakeLedgerRepository()
