"""
Fixtures compartidas por los tests.
"""

import pytest


class ScriptedRandom:
    """Fuente aleatoria que devuelve una secuencia fija de sorteos."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randrange(self, n):
        if not self.values:
            raise AssertionError(f"Sorteo no previsto: randrange({n})")
        value = self.values.pop(0)
        assert 0 <= value < n, f"{value} fuera de [0, {n})"
        self.calls.append(n)
        return value


@pytest.fixture
def scripted_rng():
    """Fábrica de fuentes aleatorias con secuencia fija."""
    return ScriptedRandom
