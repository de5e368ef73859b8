"""Tests for settings, formatting and the store factory."""

import pytest
from decimal import Decimal

from finance_tracker.config import (
    AppSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)
from finance_tracker.factory import create_ledger_store, create_storage
from finance_tracker.formatting import format_amount, format_totals
from finance_tracker.models.entry import Totals
from finance_tracker.services.storage import InMemoryLedgerStorage, JsonFileLedgerStorage


class TestSettings:
    """Tests for pydantic-settings configuration."""

    def test_storage_defaults(self, monkeypatch):
        for name in ("BACKEND", "DIRECTORY", "SLOT", "WRITE_ATTEMPTS", "RETRY_WAIT_SECONDS"):
            monkeypatch.delenv(f"LEDGER_STORAGE_{name}", raising=False)
        settings = StorageSettings()
        assert settings.backend == "json"
        assert settings.slot == "entries"
        assert settings.write_attempts == 3

    def test_storage_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LEDGER_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("LEDGER_STORAGE_DIRECTORY", str(tmp_path))
        monkeypatch.setenv("LEDGER_STORAGE_SLOT", "household")
        settings = StorageSettings()
        assert settings.backend == "memory"
        assert settings.directory == tmp_path
        assert settings.slot == "household"

    @pytest.mark.parametrize("field, value", [
        ("backend", "sqlite"),
        ("slot", "../escape"),
        ("write_attempts", 0),
    ])
    def test_storage_rejects_bad_values(self, field, value):
        with pytest.raises(ValueError):
            StorageSettings(**{field: value})

    @pytest.mark.parametrize("ceiling", [0, -5.0, 1e16, 1e40])
    def test_max_entry_amount_bounds(self, ceiling):
        with pytest.raises(ValueError):
            AppSettings(max_entry_amount=ceiling)

    def test_log_level_normalized(self):
        assert AppSettings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValueError):
            AppSettings(log_level="chatty")

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("LEDGER_STORAGE_BACKEND", "sqlite")
        get_settings.cache_clear()
        try:
            results = validate_all_settings()
        finally:
            get_settings.cache_clear()
        assert results["app"] is True
        assert results["storage"] is False
        assert "storage_error" in results


class TestFormatting:
    """Tests for display formatting."""

    @pytest.mark.parametrize("value, expected", [
        (Decimal("954.5"), "$954.50"),
        (Decimal("1000"), "$1,000.00"),
        (Decimal("0"), "$0.00"),
        (Decimal("-12.5"), "-$12.50"),
        (Decimal("0.005"), "$0.01"),
        (Decimal("1234567.891"), "$1,234,567.89"),
    ])
    def test_format_amount(self, value, expected):
        assert format_amount(value) == expected

    def test_format_amount_symbol(self):
        assert format_amount(Decimal("3"), symbol="€") == "€3.00"

    def test_format_totals(self):
        totals = Totals(total_income=Decimal("1000"), total_expense=Decimal("45.5"))
        assert format_totals(totals) == {
            "total_income": "$1,000.00",
            "total_expense": "$45.50",
            "net_balance": "$954.50",
        }


class TestFactory:
    """Tests for create_storage and create_ledger_store."""

    def test_create_storage_memory(self):
        storage = create_storage(StorageSettings(backend="memory", slot="s1"))
        assert isinstance(storage, InMemoryLedgerStorage)
        assert storage.source == "memory:s1"

    def test_create_storage_json(self, tmp_path):
        storage = create_storage(StorageSettings(backend="json", directory=tmp_path))
        assert isinstance(storage, JsonFileLedgerStorage)
        assert storage.path == tmp_path / "entries.json"

    def test_create_ledger_store_loads(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LEDGER_STORAGE_DIRECTORY", str(tmp_path))
        monkeypatch.setenv("LEDGER_STORAGE_BACKEND", "json")
        settings = Settings()

        first = create_ledger_store(settings, configure_logs=False)
        assert first.is_loaded
        first.create("Salary", "1000.00", "income")

        second = create_ledger_store(settings, configure_logs=False)
        assert second.list_entries() == first.list_entries()

    def test_create_ledger_store_with_injected_storage(self):
        storage = InMemoryLedgerStorage()
        store = create_ledger_store(Settings(), storage=storage, configure_logs=False)
        store.create("Rent", "800", "expense")
        assert storage.save_count == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
