"""Tests for the director seed script."""

import importlib.util
import logging
from datetime import date
from pathlib import Path
from types import ModuleType
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "seed_employees.py"


@pytest.fixture
def seed_module() -> ModuleType:
    spec = importlib.util.spec_from_file_location("seed_employees", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def wired(seed_module: ModuleType, monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace the database session, engine and service inside the script."""
    session_cm = MagicMock()
    session_cm.__aenter__ = AsyncMock(return_value=MagicMock())
    session_cm.__aexit__ = AsyncMock(return_value=False)
    monkeypatch.setattr(seed_module, "async_session_maker", MagicMock(return_value=session_cm))

    engine = MagicMock()
    engine.dispose = AsyncMock()
    monkeypatch.setattr(seed_module, "engine", engine)

    service = MagicMock()
    service.create_employee = AsyncMock()
    monkeypatch.setattr(seed_module, "EmployeeService", MagicMock(return_value=service))
    monkeypatch.setattr(seed_module, "EmployeeRepository", MagicMock())
    monkeypatch.setattr(seed_module, "get_password_service", MagicMock())
    return service


class TestSeedDirector:
    @pytest.mark.anyio
    async def test_success_logs_id_without_email(
        self, seed_module: ModuleType, wired: MagicMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        employee_id = uuid4()
        wired.create_employee.return_value = MagicMock(id=employee_id, email="director@company.com")

        with caplog.at_level(logging.INFO, logger="seed_employees"):
            created = await seed_module.seed_director(
                email="director@company.com",
                password="SecurePass123!",
                doc_number="DIR-001",
                first_name="Ada",
                last_name="Lovelace",
                date_of_birth=date(1980, 12, 10),
            )

        assert created is True
        assert str(employee_id) in caplog.text
        assert "director@company.com" not in caplog.text
