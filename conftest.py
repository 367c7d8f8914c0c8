"""Test configuration for the catalog package."""

pytest_plugins = ["tests.fixtures"]
