"""Exceptions raised while converting contracts.

Every error is fatal for the conversion that raised it. The attributes
(contract, key, value, pattern) locate the offending entry and are
rendered into the message.
"""

from typing import Any, Optional


class ContractConversionError(ValueError):
    """Base class for all conversion failures."""

    def __init__(
        self,
        message: str,
        *,
        contract: Optional[str] = None,
        key: Optional[str] = None,
        value: Any = None,
        pattern: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.contract = contract
        self.key = key
        self.value = value
        self.pattern = pattern

    def with_contract(self, contract: str) -> "ContractConversionError":
        """Attach the contract name (or index) unless one is already set."""
        if self.contract is None:
            self.contract = contract
        return self

    def __str__(self) -> str:
        if self.contract is None:
            return self.message
        return f"Contract [{self.contract}]: {self.message}"


class ConfigurationError(ContractConversionError):
    """The document (or model) cannot be converted as declared."""


class AmbiguousMatcherError(ConfigurationError):
    """Several matchers target the same field."""


class ResourceNotFoundError(ConfigurationError, FileNotFoundError):
    """A referenced body file does not exist under the resource root."""

    def __init__(self, relative_path: str, root: Optional[str] = None):
        where = f" under [{root}]" if root else ""
        super().__init__(f"File [{relative_path}] is not present{where}", key=relative_path)
        self.filename = relative_path


class MatcherConsistencyError(ContractConversionError):
    """A declared regex does not match the example value next to it."""

    def __init__(self, key: str, value: Any, pattern: str):
        super().__init__(
            f"Broken matcher! An entry with key [{key}] with value [{value}] "
            f"is not matched by regex [{pattern}]",
            key=key,
            value=value,
            pattern=pattern,
        )
