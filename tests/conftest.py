"""Test configuration for the ticketing package."""

from tests.fixtures import *  # noqa: F401,F403
