# rotor_and_reflector.py
from __future__ import annotations

from debug import Debug
from errors import InvalidRotorPosition, InvalidRotorWiring
from keyboard_and_plugboard import ALPHABET, Alphabet

debug = Debug()


def validate_wiring(wiring: str, alphabet: Alphabet = ALPHABET) -> None:
    """Reject anything that is not a fixed-point-free permutation of *alphabet*."""
    if not isinstance(wiring, str):
        raise InvalidRotorWiring(f"expected a string, got {type(wiring).__name__}")
    if len(wiring) != len(alphabet):
        raise InvalidRotorWiring(
            f"wiring has {len(wiring)} symbols, alphabet has {len(alphabet)}"
        )
    if sorted(wiring) != sorted(alphabet):
        raise InvalidRotorWiring("wiring must be a permutation of alphabet")
    for i, (wired, plain) in enumerate(zip(wiring, alphabet)):
        if wired == plain:
            raise InvalidRotorWiring(f"fixed point {plain!r} at position {i}")


class Rotor:
    def __init__(
        self,
        wiring: str,
        notch_position: int,
        alphabet: Alphabet = ALPHABET,
    ) -> None:
        validate_wiring(wiring, alphabet)
        if not 0 <= notch_position < len(alphabet):
            raise InvalidRotorWiring(f"notch {notch_position} outside alphabet")

        self.alphabet = alphabet
        self.size = len(alphabet)
        self.wiring = wiring

        # integer lookup tables
        self._fwd = [alphabet.index_of(c) for c in wiring]
        self._rev = [wiring.index(c) for c in alphabet]

        self.notch_position = notch_position
        self.position = 0

    # ── position & notch ─────────────────────────────────────────
    def set_position(self, symbol: str) -> None:
        if symbol not in self.alphabet:
            raise InvalidRotorPosition(symbol)
        self.position = self.alphabet.index_of(symbol)

    @property
    def window(self) -> str:
        """Symbol currently showing in the machine window."""
        return self.alphabet.symbol_at(self.position)

    def at_notch(self) -> bool:
        return self.position == self.notch_position

    # ── stepping --------------------------------------------------
    def step(self) -> None:
        self.position = (self.position + 1) % self.size
        debug.log("rotor", "pos %d, at_notch=%s", self.position, self.at_notch())

    # ── signal paths ---------------------------------------------
    def encode_forward(self, signal: int) -> int:
        """Signal entering from the right (keyboard side)."""
        shift = (signal + self.position) % self.size
        return (self._fwd[shift] - self.position) % self.size

    def encode_backward(self, signal: int) -> int:
        """Signal returning from the reflector."""
        shift = (signal + self.position) % self.size
        return (self._rev[shift] - self.position) % self.size

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<Rotor pos={self.position} notch={self.notch_position}>"


class Reflector:
    """Fixed reciprocal wheel built by pairing neighbouring positions.

    Positions are paired greedily left to right: (0, 1), (2, 3), ...
    An involution over an odd number of positions cannot avoid a fixed
    point, so with the 53-symbol alphabet the last position is left
    wired to itself; every other position reflects to a different one.
    """

    def __init__(self, alphabet: Alphabet = ALPHABET) -> None:
        self.alphabet = alphabet
        self.size = len(alphabet)
        self._map = self._build(self.size)
        debug.log(
            "reflector",
            "built %d pairs, fixed points %s",
            self.size // 2,
            self.fixed_points(),
        )

    @staticmethod
    def _build(size: int) -> list[int]:
        wiring: list[int | None] = [None] * size
        for i in range(size):
            if wiring[i] is not None:
                continue
            for j in range(i + 1, size):
                if wiring[j] is None:
                    wiring[i], wiring[j] = j, i
                    break

        # odd alphabet: the last position found no partner
        leftover = [i for i, w in enumerate(wiring) if w is None]
        for i in leftover:
            wiring[i] = i
        return [w for w in wiring if w is not None]

    @property
    def wiring(self) -> str:
        return "".join(self.alphabet.symbol_at(p) for p in self._map)

    def reflect(self, signal: int) -> int:
        return self._map[signal]

    def fixed_points(self) -> list[int]:
        return [i for i, j in enumerate(self._map) if i == j]

    def validate(self) -> None:
        """Check the table is a total, reciprocal bijection."""
        if sorted(self._map) != list(range(self.size)):
            raise InvalidRotorWiring("reflector is not a bijection")
        for i, j in enumerate(self._map):
            if self._map[j] != i:
                raise InvalidRotorWiring(f"reflector breaks reciprocity at {i}")
        expected = [self.size - 1] if self.size % 2 else []
        if self.fixed_points() != expected:
            raise InvalidRotorWiring(
                f"reflector fixed points {self.fixed_points()}, expected {expected}"
            )

    def __repr__(self) -> str:
        return f"<Reflector size={self.size}>"
