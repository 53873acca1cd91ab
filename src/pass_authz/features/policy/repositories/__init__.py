"""Policy repositories package."""

from .pass_client import PassRepositoryClient

__all__ = ["PassRepositoryClient"]
