# settings_generator.py
from __future__ import annotations

from pathlib import Path
from random import Random, SystemRandom

from debug import Debug
from errors import FileError
from keyboard_and_plugboard import ALPHABET, Alphabet
from utilities import RotorState, save_rotor_state

debug = Debug()

PLUGBOARD_TEMPLATE = """
# Enigma Plugboard Configuration
# Each pair swaps two characters bidirectionally
# Use two-character strings like "ab", "CD", "X ", etc.

pairs = [
    # "ab",  # a <-> b
    # "CD",  # C <-> D
    # "X ",  # X <-> space
]
"""

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def has_fixed_point(wiring: str, alphabet: Alphabet = ALPHABET) -> bool:
    return any(w == a for w, a in zip(wiring, alphabet))


def make_rotor(alphabet: Alphabet, rng: Random | SystemRandom) -> str:
    """Return a random permutation of *alphabet* with no symbol left in place."""
    chars = list(alphabet)
    while True:
        rng.shuffle(chars)
        wiring = "".join(chars)
        if not has_fixed_point(wiring, alphabet):
            return wiring


# ── writers ──────────────────────────────────────────────────────


def generate_rotors(
    outfile: str | Path,
    rng: Random | SystemRandom | None = None,
) -> RotorState:
    rng = rng or build_rng(None)
    state = RotorState(*(make_rotor(ALPHABET, rng) for _ in range(3)))
    save_rotor_state(state, outfile)
    return state


def generate_plugboard(outfile: str | Path) -> Path:
    path = Path(outfile)
    try:
        path.write_text(PLUGBOARD_TEMPLATE, encoding="utf-8")
    except OSError as exc:
        raise FileError(str(exc)) from exc
    debug.log("keyfile", "wrote plugboard template %s", path)
    return path
