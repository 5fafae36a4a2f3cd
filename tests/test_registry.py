import logging

import pytest

from core.config import AppConfig, DataTypesConfig
from core.duration import DurationValidator
from core.models.errors import ErrorCode
from core.protocols import TypeValidator
from core.registry import ValidatorRegistry, build_registry


class AlwaysValid:
    @property
    def name(self) -> str:
        return "duration"

    def validate(self, value):
        return ErrorCode.NO_ERROR

    def compare(self, first, second, delimiters=None):
        return True


def test_duration_validator_implements_protocol():
    assert isinstance(DurationValidator(), TypeValidator)


def test_register_and_dispatch():
    registry = ValidatorRegistry()
    registry.register(DurationValidator())

    assert registry.has("duration")
    assert registry.names() == ["duration"]
    assert registry.validate("duration", "PT1H") == ErrorCode.NO_ERROR
    assert registry.validate("duration", "PT") == ErrorCode.TYPE_MISMATCH
    assert registry.compare("duration", "P1D", "PT24H") is True
    assert registry.compare("duration", "P1D", "PT24H", ["[.]"]) is False


def test_unknown_type():
    registry = ValidatorRegistry()

    assert registry.validate("real", "1.0") == ErrorCode.UNDEFINED_ELEMENT
    assert registry.compare("real", "1.0", "1.0") is False
    with pytest.raises(KeyError):
        registry.get("real")


def test_register_rejects_non_validator():
    registry = ValidatorRegistry()

    with pytest.raises(TypeError):
        registry.register(object())


def test_register_overwrite_warns(caplog):
    registry = ValidatorRegistry()
    registry.register(DurationValidator())

    with caplog.at_level(logging.WARNING, logger="core.registry"):
        registry.register(AlwaysValid())

    assert "Overwriting" in caplog.text
    assert registry.validate("duration", "nonsense") == ErrorCode.NO_ERROR


def test_build_registry_from_config():
    registry = build_registry(AppConfig())

    assert isinstance(registry.get("duration"), DurationValidator)


def test_build_registry_skips_unknown_types(caplog):
    config = AppConfig(datatypes=DataTypesConfig(enabled=["duration", "real"]))

    with caplog.at_level(logging.WARNING, logger="core.registry"):
        registry = build_registry(config)

    assert registry.names() == ["duration"]
    assert "real" in caplog.text


def test_build_registry_nothing_enabled():
    config = AppConfig(datatypes=DataTypesConfig(enabled=[]))

    assert build_registry(config).names() == []
