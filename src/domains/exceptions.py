# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared exceptions for domain services.

This module defines the exception hierarchy used by every domain:
- DomainError: Base exception for all domain errors
- InvalidArgumentError: A required identifier is missing or blank
- NotFoundError: A referenced entity does not exist
- EntityValidationError: An entity was constructed with invalid data

Access denials are not exceptions; they are returned as regular results.
"""


class DomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None):
        """Initialize domain error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class InvalidArgumentError(DomainError):
    """Raised when a required argument is missing or blank.

    Attributes:
        field: Name of the offending argument.
    """

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"{field} is required", {"field": field})


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist.

    Attributes:
        entity: Entity kind (e.g. "institution", "lesson").
        entity_id: Identifier that was looked up.
    """

    def __init__(self, entity: str, entity_id: str, message: str | None = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            message or f"{entity.capitalize()} with ID {entity_id} not found",
            {"entity": entity, "id": entity_id},
        )


class EntityValidationError(DomainError):
    """Raised when an entity fails validation at construction time."""


def require_ids(**values: str | None) -> None:
    """Validate that every given identifier is a non-blank string.

    Args:
        **values: Identifier name to value mapping, checked in order.

    Raises:
        InvalidArgumentError: For the first missing or blank identifier.
    """
    for name, value in values.items():
        if not value or not value.strip():
            raise InvalidArgumentError(name)
