"""Tests for application configuration."""

from __future__ import annotations

from unittest.mock import patch

from radcliffe.config import AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = AppConfig()

        assert config.workers is None
        assert config.queue_size == 1024
        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.debug is False
        assert config.output_suffix == "_out.json"

    def test_custom_config(self) -> None:
        """Should create config with custom values."""
        config = AppConfig(workers=2, queue_size=0, host="0.0.0.0", port=8080, debug=True)

        assert config.workers == 2
        assert config.queue_size == 0
        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.debug is True

    def test_resolve_workers_explicit(self) -> None:
        """Explicit worker count is used as-is."""
        assert AppConfig(workers=3).resolve_workers() == 3

    def test_resolve_workers_defaults_to_cpu_count(self) -> None:
        """Falls back to the number of CPUs."""
        with patch("radcliffe.config.os.cpu_count", return_value=6):
            assert AppConfig().resolve_workers() == 6

    def test_resolve_workers_unknown_cpu_count(self) -> None:
        """Uses a single worker when the CPU count is unknown."""
        with patch("radcliffe.config.os.cpu_count", return_value=None):
            assert AppConfig().resolve_workers() == 1

    def test_resolve_workers_never_below_one(self) -> None:
        """A zero worker count is raised to one."""
        assert AppConfig(workers=0).resolve_workers() == 1
