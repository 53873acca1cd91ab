"""Root of the pass-authz exception hierarchy.

Every error raised by the library is a PassAuthzError carrying a machine
readable ``error_code`` (the class name unless given) and a ``details``
mapping with the URIs, roles or statuses involved.
"""

from typing import Any, Dict, Optional


class PassAuthzError(Exception):
    """Base exception for all pass-authz errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(PassAuthzError):
    """Raised when configuration is missing or invalid."""
    pass


class BuilderAlreadyPerformedError(PassAuthzError):
    """Raised when a permission builder is performed more than once."""
    pass


class MessageFormatError(PassAuthzError):
    """Raised when a repository event message cannot be understood."""
    pass


class InvalidIriError(PassAuthzError):
    """Raised when a role, resource or ACL is not an absolute IRI.

    Such values are rejected before anything is written to the repository.
    """

    def __init__(self, value: str, role: str = "IRI"):
        super().__init__(
            f"Not a valid {role}: {value!r}",
            details={"value": value, "role": role}
        )
        self.value = value
