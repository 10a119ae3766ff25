from __future__ import annotations

from pathlib import Path

import pytest
from starlette.testclient import TestClient

from employee_pairs.core.reporting import ConditionReporter
from employee_pairs.main import app

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _test_settings():
    from employee_pairs.core.config import settings

    original_test_mode = settings.TEST_MODE
    settings.TEST_MODE = True
    yield
    settings.TEST_MODE = original_test_mode


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def reporter():
    return ConditionReporter(test_mode=True)


@pytest.fixture
def fixture_path():
    def _path(name: str) -> Path:
        return FIXTURES_DIR / name

    return _path


@pytest.fixture
def write_records(tmp_path):
    def _write(content: str, name: str = "records.txt", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding=encoding)
        return path

    return _write
