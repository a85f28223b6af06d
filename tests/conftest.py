"""Pytest configuration and shared fixtures for dfopt tests.

This module provides:
- A deterministic numpy RNG fixture
- Global numpy and torch seeding for reproducible tests
- A criterion wrapper that counts evaluations
"""

import os
from typing import Callable

import numpy as np
import pytest
import torch


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


class CountingCriterion:
    """Wrap a criterion and count how often it is evaluated."""

    def __init__(self, fun: Callable, limit: int = 100_000) -> None:
        self.fun = fun
        self.calls = 0
        self.limit = limit

    def __call__(self, x):
        self.calls += 1
        if self.calls > self.limit:
            raise RuntimeError("criterion evaluated too many times")
        return self.fun(x)


@pytest.fixture
def counting() -> Callable[..., CountingCriterion]:
    """Factory fixture returning evaluation-counting criteria."""
    return CountingCriterion
