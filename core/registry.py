"""Validator registry -- stores and retrieves type validators by data type name.

At startup the runtime instantiates the validators enabled in config.yaml and
registers them here. Data-model elements look up their validator by type name.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.duration import DurationValidator
from core.models.errors import ErrorCode
from core.protocols import TypeValidator

if TYPE_CHECKING:
    from core.config import AppConfig

logger = logging.getLogger(__name__)

# All built-in data types
BUILTIN_VALIDATORS: dict[str, type] = {
    "duration": DurationValidator,
}


class ValidatorRegistry:
    """Central registry for all type validators.

    Usage:
        registry = ValidatorRegistry()
        registry.register(DurationValidator())

        registry.validate("duration", "PT1H")               # ErrorCode.NO_ERROR
        registry.compare("duration", "P1D", "PT24H")        # True
    """

    def __init__(self) -> None:
        self._validators: dict[str, TypeValidator] = {}

    def register(self, validator: TypeValidator) -> None:
        """Register a validator under its `name`.

        Raises TypeError if the object does not implement TypeValidator.
        """
        if not isinstance(validator, TypeValidator):
            raise TypeError(
                f"{type(validator).__name__} does not implement TypeValidator"
            )

        name = validator.name
        if name in self._validators:
            logger.warning("Overwriting existing validator '%s'", name)

        self._validators[name] = validator
        logger.info("Registered validator: %s", name)

    def get(self, name: str) -> TypeValidator:
        """Get the validator for a data type.

        Raises KeyError if not found.
        """
        if name not in self._validators:
            available = list(self._validators.keys())
            raise KeyError(
                f"No validator for type '{name}'. "
                f"Available: {available}"
            )
        return self._validators[name]

    def has(self, name: str) -> bool:
        """Check if a validator is registered."""
        return name in self._validators

    def names(self) -> list[str]:
        """List all registered data type names."""
        return list(self._validators.keys())

    def validate(self, type_name: str, value: str | None) -> ErrorCode:
        """Validate a value with the named type's validator.

        An unregistered type yields UNDEFINED_ELEMENT.
        """
        if not self.has(type_name):
            logger.debug("Validation requested for unknown type '%s'", type_name)
            return ErrorCode.UNDEFINED_ELEMENT
        return self._validators[type_name].validate(value)

    def compare(
        self,
        type_name: str,
        first: str | None,
        second: str | None,
        delimiters: list[str] | None = None,
    ) -> bool:
        """Compare two values with the named type's validator.

        An unregistered type never compares equal.
        """
        if not self.has(type_name):
            logger.debug("Comparison requested for unknown type '%s'", type_name)
            return False
        return self._validators[type_name].compare(first, second, delimiters)


def build_registry(config: AppConfig) -> ValidatorRegistry:
    """Create a registry holding the validators enabled in config."""
    registry = ValidatorRegistry()
    for type_name in config.datatypes.enabled:
        validator_cls = BUILTIN_VALIDATORS.get(type_name)
        if validator_cls is None:
            logger.warning(
                "Unknown data type '%s' in config. Must be one of: %s",
                type_name, list(BUILTIN_VALIDATORS.keys()),
            )
            continue
        registry.register(validator_cls())
    return registry
