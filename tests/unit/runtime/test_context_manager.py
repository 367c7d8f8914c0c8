"""Unit tests for the application context manager."""

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import patch

import pytest

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import (
    AppContext,
    get_config,
    get_context,
    load_default_config,
    set_config,
    set_context,
    with_context,
)


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        """Should have a default context available."""
        context = get_context()
        config = get_config()

        assert isinstance(context, AppContext)
        assert isinstance(config, ConfigData)
        assert context.config is config

    def test_with_context_override_single_level(self):
        """Should override config for the duration of the context manager."""
        original_config = get_config()
        original_page_size = original_config.catalog.default_page_size

        test_config = ConfigData()
        test_config.catalog.default_page_size = 7

        with with_context(test_config):
            override_config = get_config()
            assert override_config.catalog.default_page_size == 7
            assert override_config is not original_config

        after_config = get_config()
        assert after_config.catalog.default_page_size == original_page_size
        assert after_config is original_config

    def test_with_context_nested_overrides(self):
        """Should handle nested context overrides correctly."""
        original_config = get_config()

        level1_config = ConfigData()
        level1_config.catalog.create_missing_groups = False
        level1_config.app.environment = "production"

        with with_context(level1_config):
            assert get_config().catalog.create_missing_groups is False
            assert get_config().app.environment == "production"

            level2_config = ConfigData()
            level2_config.app.environment = "test"
            level2_config.logging.level = "DEBUG"

            with with_context(level2_config):
                level2 = get_config()
                assert level2.app.environment == "test"
                assert level2.logging.level == "DEBUG"
                # inherited from level 1
                assert level2.catalog.create_missing_groups is False

            back_to_level1 = get_config()
            assert back_to_level1.app.environment == "production"
            assert back_to_level1.logging.level == original_config.logging.level

        assert get_config() is original_config

    def test_with_context_no_override(self):
        """Should work without any override (current context)."""
        original_config = get_config()

        with with_context():
            assert get_config() is original_config

        assert get_config() is original_config

    def test_with_context_rejects_other_types(self):
        with pytest.raises(ValueError, match="ConfigData"):
            with with_context({"catalog": {}}):
                pass

    def test_context_restored_after_exception(self):
        original_config = get_config()
        override = ConfigData()
        override.catalog.default_page_size = 3

        with pytest.raises(RuntimeError):
            with with_context(override):
                raise RuntimeError("boom")

        assert get_config() is original_config

    def test_context_isolation_across_threads(self):
        """A thread started outside the override sees the default config."""
        override = ConfigData()
        override.catalog.default_page_size = 11
        original_page_size = get_config().catalog.default_page_size

        with with_context(override):
            with ThreadPoolExecutor(max_workers=1) as executor:
                page_size = executor.submit(lambda: get_config().catalog.default_page_size).result()

        assert page_size == original_page_size

    def test_set_config_replaces_whole_config(self):
        original_context = get_context()
        replacement = ConfigData()
        replacement.catalog.default_page_size = 2

        try:
            set_config(replacement)
            assert get_config() is replacement
        finally:
            set_context(original_context)

        assert get_context() is original_context


class TestLoadDefaultConfig:
    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path):
        config = load_default_config(tmp_path / "missing.yaml")

        assert config == ConfigData()

    def test_reads_given_file(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  catalog:\n    default_page_size: 5\n")

        assert load_default_config(path).catalog.default_page_size == 5

    def test_repository_config_loads_without_environment(self):
        path = Path(__file__).parents[3] / "config.yaml"

        with patch.dict(os.environ, {}, clear=True):
            config = load_default_config(path)

        assert config.database.url == "sqlite:///./catalog.db"
        assert config.catalog.default_page_size == 100
