"""
Provider Exception Hierarchy

Every error raised by the provider knows how it is shown to the Terraform
user: a short summary, a longer detail, and optionally the provider
attribute it concerns.

Exception hierarchy:
    ProviderError (base)
    ├── ConfigurationError - missing or invalid endpoint / token
    ├── AuthenticationError - access token login failed
    ├── ProviderNotConfiguredError - resource used before configure
    ├── ClientError - a Bitwarden SDK call failed
    ├── OperationError - a resource / data source operation failed
    └── IdGenerationError - tracking id could not be generated

Messages MUST NOT include secret values or notes, only ids.
"""

from typing import Optional


class ProviderError(Exception):
    """
    Base exception for all provider errors.

    Attributes:
        summary: Diagnostic summary line
        detail: Diagnostic detail text
        attribute: Provider/resource attribute the error points at, if any
    """

    def __init__(self, summary: str, detail: str = "", attribute: Optional[str] = None):
        super().__init__(summary)
        self.summary = summary
        self.detail = detail
        self.attribute = attribute

    def __str__(self) -> str:
        if self.detail:
            return f"{self.summary}: {self.detail}"
        return self.summary


class ConfigurationError(ProviderError):
    """Raised when the provider block cannot produce a usable client."""


class AuthenticationError(ProviderError):
    """Raised when the access token login is rejected or cannot be performed."""

    def __init__(self, reason: str):
        super().__init__(
            "Unable to login to Bitwarden Secrets Manager",
            "Either the access token is not valid or there is some communication issues: " + reason,
            attribute="access_token",
        )
        self.reason = reason


class ProviderNotConfiguredError(ProviderError):
    """Raised when a resource or data source runs without a configured client."""

    def __init__(self):
        super().__init__(
            "Unconfigured Bitwarden client",
            "The provider has not been configured yet. "
            "Please report this issue to the provider developers.",
        )


class ClientError(ProviderError):
    """
    Raised when a Bitwarden SDK call fails.

    Attributes:
        operation: SDK operation name (e.g. "projects.get")
        message: Error message reported by the SDK
    """

    def __init__(self, operation: str, message: str):
        super().__init__(
            "Bitwarden API error",
            f"{operation} failed: {message}",
        )
        self.operation = operation
        self.message = message

    def __str__(self) -> str:
        return self.message


class OperationError(ProviderError):
    """Raised when a CRUD or lookup operation aborts."""


class IdGenerationError(ProviderError):
    """Raised when the resource tracking id cannot be generated."""

    def __init__(self, reason: str):
        super().__init__(
            "Unable to generate resource id",
            f"The resource couldn't be created, due to an id generation issue: {reason}",
            attribute="id",
        )
