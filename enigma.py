# enigma.py  ────────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from debug import Debug
from errors import InvalidMessage
from keyboard_and_plugboard import ALPHABET, Plugboard
from rotor_and_reflector import Reflector, Rotor
from utilities import RotorState, load_plugboard_pairs, load_rotor_state

debug = Debug()

# notch offsets of rotor1 (fast), rotor2 (middle), rotor3 (slow)
NOTCH_POSITIONS: tuple[int, int, int] = (16, 4, 21)


class EnigmaMachine:
    def __init__(
        self,
        rotor_state: RotorState | Sequence[str],
        plugboard: Plugboard | Iterable[str] | None = None,
        positions: str = "aaa",
    ) -> None:
        if isinstance(rotor_state, RotorState):
            wirings = rotor_state.wirings()
        else:
            wirings = tuple(rotor_state)
        if len(wirings) != 3:
            raise ValueError(f"expected 3 rotor wirings, got {len(wirings)}")

        self.rotor1, self.rotor2, self.rotor3 = (
            Rotor(wiring, notch, ALPHABET)
            for wiring, notch in zip(wirings, NOTCH_POSITIONS)
        )
        self.set_positions(positions)

        if plugboard is None:
            plugboard = Plugboard.identity(ALPHABET)
        elif not isinstance(plugboard, Plugboard):
            plugboard = Plugboard.from_pairs(plugboard, ALPHABET)

        self.plugboard = plugboard
        self.reflector = Reflector(ALPHABET)
        self.alphabet = ALPHABET

    @classmethod
    def from_files(
        cls,
        rotor_file: str | Path,
        plugboard_file: str | Path | None = None,
        positions: str = "aaa",
    ) -> "EnigmaMachine":
        """Build a machine from a key file and an optional plugboard file.

        A plugboard file that does not exist leaves the board unplugged.
        """
        rotor_state = load_rotor_state(rotor_file)

        pairs: list[str] = []
        if plugboard_file is not None and Path(plugboard_file).exists():
            pairs = load_plugboard_pairs(plugboard_file)

        return cls(rotor_state, pairs, positions)

    # ── key helpers ─────────────────────────────────────────────

    def set_positions(self, positions: str) -> None:
        """Rotate each rotor to its window letter (rotor1 first)."""
        if len(positions) != 3:
            raise InvalidMessage("Rotor positions must be 3 characters")
        for rotor, symbol in zip(self.rotors, positions):
            rotor.set_position(symbol)

    @property
    def rotors(self) -> tuple[Rotor, Rotor, Rotor]:
        return self.rotor1, self.rotor2, self.rotor3

    @property
    def positions(self) -> str:
        return "".join(rotor.window for rotor in self.rotors)

    # ── stepping logic  ─────────────────────────────────────────

    def step_rotors(self) -> None:
        """Advance the rotors for one key press.

        Both notch checks read the positions from before this key press.
        When rotor1 and rotor2 sit on their notches together, rotor2
        steps twice.
        """
        middle_at_notch = self.rotor2.at_notch()
        right_at_notch = self.rotor1.at_notch()

        if middle_at_notch:
            self.rotor2.step()
            self.rotor3.step()

        if right_at_notch:
            self.rotor2.step()

        self.rotor1.step()
        debug.log("stepping", "positions %r", self.positions)

    # ── encipher  ───────────────────────────────────────────────

    def encode_char(self, symbol: str) -> str:
        if symbol not in self.alphabet:
            raise InvalidMessage(f"Invalid character: {symbol}")

        self.step_rotors()

        signal = self.alphabet.index_of(self.plugboard.swap(symbol))

        signal = self.rotor1.encode_forward(signal)
        signal = self.rotor2.encode_forward(signal)
        signal = self.rotor3.encode_forward(signal)

        signal = self.reflector.reflect(signal)

        signal = self.rotor3.encode_backward(signal)
        signal = self.rotor2.encode_backward(signal)
        signal = self.rotor1.encode_backward(signal)

        out_ch = self.plugboard.swap(self.alphabet.symbol_at(signal))
        debug.log("encipher", "%r -> %r", symbol, out_ch)
        return out_ch

    def encode_message(self, message: str) -> str:
        """Encipher *message*; the rotors keep their new positions afterwards.

        An invalid symbol aborts the message, but the stepping already
        done for the symbols before it is not undone.
        """
        if not message:
            raise InvalidMessage("Empty message")
        return "".join(self.encode_char(ch) for ch in message)

    def __repr__(self) -> str:
        return f"<EnigmaMachine positions={self.positions!r} {self.plugboard!r}>"
