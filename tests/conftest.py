from datetime import date

import pytest
from PySide6.QtCore import QCoreApplication

from casecal.app.case_store import CaseStore
from casecal.app.sample_cases import sample_cases

# Wednesday
TODAY = date(2026, 10, 14)


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def cases():
    return sample_cases(TODAY)


@pytest.fixture
def store(cases):
    return CaseStore(cases)


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    path = tmp_path / "config" / "settings.json"
    monkeypatch.setenv("CASECAL_SETTINGS_PATH", str(path))
    return path
