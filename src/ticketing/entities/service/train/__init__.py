"""Entity package: Train."""

from .entity import TRAIN, Train

__all__ = ["TRAIN", "Train"]
