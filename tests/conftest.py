"""Shared fixtures."""

import pytest

from core import build_default_registry
from formula import FormulaEvaluator


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def evaluator():
    return FormulaEvaluator()
