"""Core protocols -- the contract every data-model type validator implements.

The data-model runtime imports this protocol. Data types implement it.
The runtime NEVER imports concrete validators directly; it asks the
ValidatorRegistry for them by type name.

Uses Python's structural subtyping (typing.Protocol):
if your class has the right methods, it implements the protocol.
No inheritance required.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.models.errors import ErrorCode


@runtime_checkable
class TypeValidator(Protocol):
    """Checks and compares values of one data-model type.

    Implementations must be stateless: the runtime shares one instance
    between every element of that type and may call it from any thread.

    Default implementation: DurationValidator (core.duration).
    """

    @property
    def name(self) -> str:
        """Unique data type name, e.g. 'duration'."""
        ...

    def validate(self, value: str | None) -> ErrorCode:
        """Check a value before it is stored.

        Returns ErrorCode.NO_ERROR if the value conforms to the type.
        Must not raise for any string input.
        """
        ...

    def compare(
        self,
        first: str | None,
        second: str | None,
        delimiters: list[str] | None = None,
    ) -> bool:
        """Return True if two values of this type are equal.

        `delimiters` is the delimiter set shared by both values, for types
        that carry them. Must not raise for any string input.
        """
        ...
