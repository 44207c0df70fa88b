"""Randomness doubles shared by the test suite.

ScriptedRng hands out a fixed list of faces and records every request, so tests
can assert both the result and the exact draws. ExplodingRng fails on any use.
"""

from __future__ import annotations

import pytest


class ScriptedRng:
    def __init__(self, faces):
        self._faces = list(faces)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        face = self._faces.pop(0)
        assert a <= face <= b, f"scripted face {face} outside [{a}, {b}]"
        return face


class MaxRng:
    """Always rolls the highest face."""

    def randint(self, a: int, b: int) -> int:
        return b


class ExplodingRng:
    def randint(self, a: int, b: int) -> int:
        raise AssertionError("randomness must not be consumed")


@pytest.fixture
def scripted():
    return ScriptedRng


@pytest.fixture
def exploding_rng():
    return ExplodingRng()


@pytest.fixture
def max_rng():
    return MaxRng()
