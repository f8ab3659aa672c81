# keyboard_and_plugboard.py
from __future__ import annotations

import string
from collections.abc import Iterable, Iterator

from debug import Debug
from errors import InvalidPlugboardPair

debug = Debug()

DEFAULT_SYMBOLS = string.ascii_lowercase + string.ascii_uppercase + " "


# ── Alphabet (the keyboard) ───────────────────────────────────────
class Alphabet:
    """Immutable ordered symbol set; every wheel is indexed by its positions."""

    __slots__ = ("_symbols", "_index")

    def __init__(self, symbols: str) -> None:
        if not symbols:
            raise ValueError("Alphabet must contain at least one symbol")
        if len(set(symbols)) != len(symbols):
            raise ValueError(f"Alphabet {symbols!r} repeats a symbol")
        self._symbols: str = symbols
        self._index: dict[str, int] = {ch: i for i, ch in enumerate(symbols)}

    @property
    def symbols(self) -> str:
        return self._symbols

    # letter → integer signal
    def index_of(self, symbol: str) -> int:
        try:
            return self._index[symbol]
        except KeyError:
            raise ValueError(
                f"Invalid character {symbol!r} for current alphabet."
            ) from None

    # integer signal → letter
    def symbol_at(self, position: int) -> str:
        return self._symbols[position % len(self._symbols)]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f"<Alphabet size={len(self)}>"


ALPHABET = Alphabet(DEFAULT_SYMBOLS)


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    def __init__(self, alphabet: Alphabet = ALPHABET) -> None:
        """Identity board: every symbol is wired to itself."""
        self.alphabet: Alphabet = alphabet
        self.mapping: dict[str, str] = {ch: ch for ch in alphabet}

    @classmethod
    def identity(cls, alphabet: Alphabet = ALPHABET) -> "Plugboard":
        return cls(alphabet)

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[str],
        alphabet: Alphabet = ALPHABET,
    ) -> "Plugboard":
        board = cls(alphabet)
        for pair in pairs:
            board._connect(pair)
        return board

    def _connect(self, pair: str) -> None:
        if not isinstance(pair, str) or len(pair) != 2:
            raise InvalidPlugboardPair(pair)

        a, b = pair
        if a not in self.alphabet or b not in self.alphabet:
            raise InvalidPlugboardPair(pair)
        if a == b:
            raise InvalidPlugboardPair(f"Cannot plug {a!r} to itself in {pair!r}")
        if self.mapping[a] != a or self.mapping[b] != b:
            raise InvalidPlugboardPair(f"Duplicate mapping for {pair}")

        # passed validation → commit swap
        self.mapping[a], self.mapping[b] = b, a

    def swap(self, symbol: str) -> str:
        mapped = self.mapping.get(symbol, symbol)
        debug.log("plugboard", "%r->%r", symbol, mapped)
        return mapped

    def pairs(self) -> list[str]:
        """The connected cables, each listed once in alphabet order."""
        idx = self.alphabet.index_of
        return [
            a + b
            for a, b in self.mapping.items()
            if a != b and idx(a) < idx(b)
        ]

    # nicety for debugging
    def __repr__(self) -> str:
        return f"<Plugboard {' '.join(map(repr, self.pairs()))}>"
