"""Tests for environment configuration."""

from decimal import Decimal

import pytest

from stickers.domain.exceptions import ConfigurationError
from stickers.domain.model.rate_table import DEFAULT_RATE_TABLE
from stickers.infrastructure.config import (
    DEFAULT_ALLOWED_ORIGINS,
    DEFAULT_SUCCESS_URL,
    Settings,
    parse_rate_table,
)


class TestSettingsDefaults:

    def test_empty_environment(self):
        config = Settings.from_env({})
        assert config.rate_table == DEFAULT_RATE_TABLE
        assert config.minimum_total_cents == 3000
        assert config.tolerance_cents == 1
        assert config.success_url == DEFAULT_SUCCESS_URL
        assert config.allowed_origins == DEFAULT_ALLOWED_ORIGINS
        assert config.allow_all_origins is False
        assert config.stripe_secret_key is None

    def test_missing_stripe_key_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="STRIPE_SECRET_KEY"):
            Settings.from_env({}).require_stripe_key()

    def test_secret_not_in_repr(self):
        config = Settings.from_env({"STRIPE_SECRET_KEY": "sk_test_123"})
        assert "sk_test_123" not in repr(config)
        assert config.require_stripe_key() == "sk_test_123"


class TestSettingsOverrides:

    def test_all_variables(self):
        config = Settings.from_env({
            "STICKER_RATE_TABLE": "10:5.00, 20:4.50",
            "STICKER_MIN_TOTAL_CENTS": "500",
            "STICKER_PRICE_TOLERANCE_CENTS": "0",
            "CHECKOUT_SUCCESS_URL": "https://a.test/ok",
            "CHECKOUT_CANCEL_URL": "https://a.test/back",
            "ALLOWED_ORIGINS": "https://a.test, https://b.test",
            "ALLOW_ALL_ORIGINS": "yes",
        })
        assert config.rate_table.rate_for(20) == Decimal("4.50")
        assert config.minimum_total_cents == 500
        assert config.tolerance_cents == 0
        assert config.success_url == "https://a.test/ok"
        assert config.cancel_url == "https://a.test/back"
        assert config.allowed_origins == ("https://a.test", "https://b.test")
        assert config.allow_all_origins is True

    def test_non_integer_minimum_rejected(self):
        with pytest.raises(ConfigurationError, match="must be an integer"):
            Settings.from_env({"STICKER_MIN_TOTAL_CENTS": "thirty"})

    def test_zero_minimum_rejected(self):
        with pytest.raises(ConfigurationError, match="at least 1"):
            Settings.from_env({"STICKER_MIN_TOTAL_CENTS": "0"})

    def test_bad_boolean_rejected(self):
        with pytest.raises(ConfigurationError, match="true or false"):
            Settings.from_env({"ALLOW_ALL_ORIGINS": "maybe"})


class TestParseRateTable:

    def test_parses_pairs(self):
        table = parse_rate_table("50:12.75,100:11.50")
        assert table.breakpoints == [50, 100]
        assert table.rate_for(100) == Decimal("11.50")

    def test_missing_colon_rejected(self):
        with pytest.raises(ConfigurationError, match="Expected 'Quantity:DollarsPerSqft'"):
            parse_rate_table("50=12.75")

    def test_garbage_rate_rejected(self):
        with pytest.raises(ConfigurationError, match="Invalid rate"):
            parse_rate_table("50:cheap")

    def test_negative_rate_rejected(self):
        with pytest.raises(ConfigurationError, match="Invalid STICKER_RATE_TABLE"):
            parse_rate_table("50:-1")

    def test_nan_rate_rejected(self):
        with pytest.raises(ConfigurationError, match="Invalid STICKER_RATE_TABLE"):
            parse_rate_table("50:NaN")
