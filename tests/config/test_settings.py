"""
Tests for settings and the YAML loader

Tests cover:
- Code defaults
- Loading from an explicit path and from VOUCH_CONFIG
- Rejection of unknown keys, bad values and unreadable files
- Settings flowing into the factory (locale, bundles, flags)
"""

import pytest
from pydantic import ValidationError

from vouch.config import CONFIG_ENV_VAR, VouchSettings, load_settings
from vouch.core import ValidatorFactory, get_default_factory
from vouch.core.constraints import NotNull
from vouch.core.violations import ConstraintViolation
from vouch.errors import ConfigError, codes


def write(tmp_path, text, name="vouch.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    """Test code defaults"""

    def test_default_values(self):
        settings = VouchSettings.default()
        assert settings.locale == "en_US"
        assert settings.date_style == "medium"
        assert settings.time_style is None
        assert settings.message_bundles == []
        assert not settings.fail_fast
        assert not settings.localized_convert

    def test_no_file_configured(self):
        assert load_settings() == VouchSettings.default()

    def test_frozen(self):
        settings = VouchSettings.default()
        with pytest.raises(ValidationError):
            settings.locale = "de"

    def test_unknown_locale(self):
        with pytest.raises(ValidationError):
            VouchSettings(locale="xx_NOPE")


class TestLoader:
    """Test YAML loading"""

    def test_explicit_path(self, tmp_path):
        path = write(tmp_path, "locale: de_DE\nfail_fast: true\ndate_pattern: dd.MM.yyyy\n")
        settings = load_settings(path)
        assert settings.locale == "de_DE"
        assert settings.fail_fast
        assert settings.date_pattern == "dd.MM.yyyy"

    def test_env_var(self, tmp_path, monkeypatch):
        path = write(tmp_path, "locale: fr\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_settings().locale == "fr"

    def test_empty_file(self, tmp_path):
        assert load_settings(write(tmp_path, "")) == VouchSettings.default()

    def test_unknown_key(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_settings(write(tmp_path, "colour: blue\n"))
        assert exc_info.value.error_code == codes.INVALID_CONFIG
        assert exc_info.value.details["errors"][0]["loc"] == ["colour"]

    def test_bad_style(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(write(tmp_path, "date_style: tiny\n"))

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(write(tmp_path, "- locale\n"))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(write(tmp_path, "locale: [de\n"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(tmp_path / "absent.yaml")


class TestFactorySettings:
    """Test settings consumed by the factory"""

    def test_message_bundles(self, tmp_path):
        bundle = write(tmp_path, 'default:\n  constraint.not_null: "is required"\n', name="messages.yaml")
        factory = ValidatorFactory(VouchSettings(message_bundles=[str(bundle)]))

        with pytest.raises(ConstraintViolation) as exc_info:
            NotNull().validate(None, factory.new_context().build())
        assert exc_info.value.message == "is required"

    def test_default_locale(self):
        factory = ValidatorFactory(VouchSettings(locale="de"))
        context = factory.new_context().build()
        assert str(context.locale) == "de"

        with pytest.raises(ConstraintViolation) as exc_info:
            NotNull().validate(None, context)
        assert exc_info.value.message == "darf nicht null sein"

    def test_default_factory_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(write(tmp_path, "locale: de\n")))
        assert get_default_factory().settings.locale == "de"
        assert get_default_factory() is get_default_factory()
