"""State mapping services for projects and secrets."""

from .projects import ProjectService
from .secrets import SecretService

__all__ = ["ProjectService", "SecretService"]
