from __future__ import annotations

import pytest

from fakes import FakeAppStoreApi


@pytest.fixture
def api() -> FakeAppStoreApi:
    return FakeAppStoreApi()
