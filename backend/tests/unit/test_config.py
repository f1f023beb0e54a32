import pytest

from autoreorder.config import DEFAULT_SECRET_KEY, Settings


def test_defaults_are_valid_for_development():
    s = Settings(_env_file=None)

    assert s.PO_WRITE_MODE == "transaction"
    assert s.PO_NUMBER_PREFIX == "PO"
    assert s.PO_NUMBER_WIDTH == 4
    assert s.CRITICAL_STOCK_RATIO == 0.5


def test_unknown_write_mode_is_rejected():
    with pytest.raises(ValueError, match="PO_WRITE_MODE"):
        Settings(_env_file=None, PO_WRITE_MODE="eventual")


def test_critical_ratio_must_be_a_fraction():
    with pytest.raises(ValueError, match="CRITICAL_STOCK_RATIO"):
        Settings(_env_file=None, CRITICAL_STOCK_RATIO=1.5)


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"DATABASE_URL": "sqlite:///./prod.db"}, "SQLite"),
        ({"SECRET_KEY": DEFAULT_SECRET_KEY}, "SECRET_KEY"),
        ({"AUTO_CREATE_TABLES": True}, "AUTO_CREATE_TABLES"),
    ],
)
def test_production_refuses_unsafe_settings(overrides, message):
    values = {
        "ENVIRONMENT": "production",
        "DATABASE_URL": "postgresql://reorder@db/reorder",
        "SECRET_KEY": "a-real-secret",
        "AUTO_CREATE_TABLES": False,
    }
    values.update(overrides)

    with pytest.raises(ValueError, match=message):
        Settings(_env_file=None, **values)
