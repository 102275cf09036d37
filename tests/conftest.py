import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path so `lpmodeler` is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lpmodeler import Integer, Problem


@pytest.fixture
def abc():
    return Integer("a"), Integer("b"), Integer("c")


@pytest.fixture
def knapsack(abc):
    a, b, c = abc
    problem = Problem("One Problem", "maximize")
    problem += 10 * a + 20 * b
    problem += (500 * a + 1200 * b + 1500 * c) <= 10000
    problem += a <= b
    return problem
