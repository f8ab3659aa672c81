from __future__ import annotations

from random import Random

import pytest

from debug import COMPONENTS, Debug
from keyboard_and_plugboard import ALPHABET
from settings_generator import make_rotor
from utilities import RotorState


def shifted(k: int) -> str:
    """Alphabet rotated left by *k*: fixed-point-free for 0 < k < 53."""
    s = ALPHABET.symbols
    return s[k:] + s[:k]


@pytest.fixture(autouse=True)
def quiet_debug():
    dbg = Debug()
    yield dbg
    dbg.disable(*COMPONENTS)
    dbg.toggle_global(True)


@pytest.fixture
def shifted_state() -> RotorState:
    return RotorState(shifted(1), shifted(2), shifted(3))


@pytest.fixture
def random_state() -> RotorState:
    rng = Random(1942)
    return RotorState(*(make_rotor(ALPHABET, rng) for _ in range(3)))
