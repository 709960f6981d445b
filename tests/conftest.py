"""Shared pytest fixtures."""

from collections.abc import Iterator

import pytest

from staticsite.generator.metrics import GeneratorMetrics


@pytest.fixture(autouse=True)
def reset_generator_metrics() -> Iterator[None]:
    """Give every test fresh generator metrics."""
    GeneratorMetrics.reset()
    yield
    GeneratorMetrics.reset()
