# utilities.py
from __future__ import annotations

import json
import tomllib
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Dict, List

from debug import Debug
from errors import FileError, SerializationError

debug = Debug()

# ────────────────────────────────────────────────────────────────────────
#  0. The daily key: three rotor wirings
# ────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RotorState:
    """Wiring of rotor1 (fast), rotor2 (middle) and rotor3 (slow)."""

    rotor1: str
    rotor2: str
    rotor3: str

    def wirings(self) -> tuple[str, str, str]:
        return self.rotor1, self.rotor2, self.rotor3

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: object) -> "RotorState":
        if not isinstance(data, dict):
            raise SerializationError("key file must hold a JSON object")

        required = {f.name for f in fields(cls)}
        missing = required - data.keys()
        if missing:
            raise SerializationError(
                f"Missing keys in key file: {', '.join(sorted(missing))}"
            )
        bad = [k for k in sorted(required) if not isinstance(data[k], str)]
        if bad:
            raise SerializationError(f"Wiring must be a string: {', '.join(bad)}")
        return cls(**{k: data[k] for k in required})


# ────────────────────────────────────────────────────────────────────────
#  1. Key file (JSON)
# ────────────────────────────────────────────────────────────────────────


def save_rotor_state(state: RotorState, path: str | Path) -> Path:
    path = Path(path)
    try:
        path.write_text(json.dumps(state.to_dict(), indent=2), encoding="utf-8")
    except OSError as exc:
        raise FileError(str(exc)) from exc
    debug.log("keyfile", "wrote %s", path)
    return path


def load_rotor_state(path: str | Path) -> RotorState:
    path = Path(path)
    if not path.exists():
        raise FileError(f"Rotor file '{path}' not found")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileError(str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise SerializationError(str(exc)) from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(str(exc)) from exc

    state = RotorState.from_dict(data)
    debug.log("keyfile", "loaded %s", path)
    return state


# ────────────────────────────────────────────────────────────────────────
#  2. Plugboard file (TOML)
# ────────────────────────────────────────────────────────────────────────


def load_plugboard_pairs(path: str | Path) -> List[str]:
    """Return the `pairs` list of a plugboard TOML file, unvalidated."""
    path = Path(path)
    try:
        with path.open("rb") as fh:
            config = tomllib.load(fh)
    except OSError as exc:
        raise FileError(str(exc)) from exc
    except tomllib.TOMLDecodeError as exc:
        raise SerializationError(str(exc)) from exc

    pairs = config.get("pairs")
    if pairs is None:
        raise SerializationError("missing field `pairs`")
    if not isinstance(pairs, list) or not all(isinstance(p, str) for p in pairs):
        raise SerializationError("`pairs` must be a list of strings")

    debug.log("keyfile", "loaded %d plugboard pairs from %s", len(pairs), path)
    return pairs


__all__ = [
    "RotorState",
    "save_rotor_state",
    "load_rotor_state",
    "load_plugboard_pairs",
]
