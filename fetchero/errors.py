"""Exception types raised by fetchero.

Structural misuse of the fluent API raises synchronously at chain
construction. Transport and hook failures never surface as exceptions; the
execution engine turns them into error envelopes instead.
"""

from __future__ import annotations


class FetcheroError(Exception):
    """Base class for all fetchero errors."""


# ============================================================================
# Validation
# ============================================================================


class ValidationError(FetcheroError, ValueError):
    """Invalid input passed to a chain step or constructor."""


class InvalidUrl(ValidationError):
    def __init__(self, url: object) -> None:
        super().__init__(f"Invalid URL format: {'' if url is None else url}")
        self.url = url


class InvalidHeaders(ValidationError):
    def __init__(self) -> None:
        super().__init__("Headers must be a valid object")


class InvalidArgs(ValidationError):
    def __init__(self) -> None:
        super().__init__("GraphQL arguments must be an object")


class EmptySelection(ValidationError):
    def __init__(self) -> None:
        super().__init__("Field selection must be a non-empty string")


class FieldNameRequired(ValidationError):
    def __init__(self) -> None:
        super().__init__("Field name must be a non-empty string")


class InvalidBaseUrl(ValidationError):
    def __init__(self) -> None:
        super().__init__('Fetchero: "base_url" must be a non-empty string.')


class MalformedBaseUrl(ValidationError):
    def __init__(self) -> None:
        super().__init__('Fetchero: "base_url" must be a valid URL.')


class InvalidInterceptors(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid interceptors: {reason}")


class EmptyBase(ValidationError):
    def __init__(self) -> None:
        super().__init__("Base URL must be a non-empty string")


class InvalidUrlConstruction(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid URL construction: {reason}")


# Raised from __getattr__, so they must also be AttributeErrors for
# getattr(obj, name, default) and hasattr() to keep working.


class InvalidOperation(ValidationError, AttributeError):
    def __init__(self, operation: str) -> None:
        super().__init__(
            f'Invalid GraphQL operation "{operation}". Valid operations: query, mutation, subscription'
        )
        self.operation = operation


class InvalidProperty(ValidationError, AttributeError):
    def __init__(self, prop: str) -> None:
        super().__init__(
            f'Invalid property "{prop}". Available methods: select(fields), execute(), base(url), headers(obj)'
        )
        self.prop = prop


# ============================================================================
# Query building
# ============================================================================


class BuildError(FetcheroError):
    """GraphQL query text could not be synthesized."""


class QueryBuildFailed(BuildError):
    def __init__(self, operation: str, field: str, reason: str) -> None:
        super().__init__(f'Failed to build GraphQL {operation} for field "{field}": {reason}')
        self.operation = operation
        self.field = field
        self.reason = reason


class InvalidGeneratedQuery(QueryBuildFailed):
    def __init__(self, operation: str, field: str) -> None:
        super().__init__(operation, field, "Failed to generate valid GraphQL query")
