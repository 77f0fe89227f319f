"""Entity package: User."""

from .entity import User

__all__ = ["User"]
