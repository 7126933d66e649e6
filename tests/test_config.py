"""Tests for entgraph.entropy_grapher.config -- validated run configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from entgraph.common.entropy import InvalidArgumentError
from entgraph.entropy_grapher.config import (
    DEFAULT_BLOCK_SIZE,
    DEFAULT_OUTPUT,
    DEFAULT_SUSPICIOUS_ENTROPY,
    GraphConfig,
)


class TestDefaults:
    """Missing optional values fall back to the documented defaults."""

    def test_defaults(self) -> None:
        config = GraphConfig.from_args("sample.bin")
        assert config.filename == Path("sample.bin")
        assert config.block_size == DEFAULT_BLOCK_SIZE == 32
        assert config.suspicious_entropy == DEFAULT_SUSPICIOUS_ENTROPY == 5.0
        assert config.output == Path(DEFAULT_OUTPUT) == Path("point.png")

    def test_dataclass_defaults_match(self) -> None:
        assert GraphConfig(filename=Path("x")) == GraphConfig.from_args("x")

    def test_config_frozen(self) -> None:
        config = GraphConfig.from_args("sample.bin")
        with pytest.raises(AttributeError):
            config.block_size = 64  # type: ignore[misc]


class TestParsing:
    """String values are parsed the way they arrive from the command line."""

    def test_parse_strings(self) -> None:
        config = GraphConfig.from_args("a.bin", "256", "7.25", "out.svg")
        assert config.block_size == 256
        assert config.suspicious_entropy == 7.25
        assert config.output == Path("out.svg")

    def test_parse_numbers(self) -> None:
        config = GraphConfig.from_args("a.bin", 64, 6)
        assert config.block_size == 64
        assert config.suspicious_entropy == 6.0

    def test_threshold_at_max(self) -> None:
        assert GraphConfig.from_args("a.bin", suspicious_entropy="8").suspicious_entropy == 8.0

    def test_negative_threshold_allowed(self) -> None:
        """A negative threshold simply flags every block."""
        assert GraphConfig.from_args("a.bin", suspicious_entropy="-1").suspicious_entropy == -1.0


class TestValidation:
    """Invalid values fail fast with InvalidArgumentError."""

    @pytest.mark.parametrize("value", ["0", "-4", "abc", "3.5", "", 0, -1, 2.5, True])
    def test_invalid_block_size(self, value: object) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid block size"):
            GraphConfig.from_args("a.bin", block_size=value)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["8.01", "9", "abc", "", "nan", "inf", "-inf", 100.0])
    def test_invalid_suspicious_entropy(self, value: object) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid suspicious entropy"):
            GraphConfig.from_args("a.bin", suspicious_entropy=value)  # type: ignore[arg-type]

    def test_empty_filename(self) -> None:
        with pytest.raises(InvalidArgumentError, match="filename"):
            GraphConfig.from_args("")

    def test_invalid_argument_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            GraphConfig.from_args("a.bin", block_size="zero")
