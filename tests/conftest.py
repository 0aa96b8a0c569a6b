"""Test configuration for the user admin service."""

from tests.fixtures import *  # noqa: F401,F403
