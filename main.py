# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from debug import COMPONENTS, Debug
from enigma import EnigmaMachine
from errors import EnigmaError
from settings_generator import build_rng, generate_plugboard, generate_rotors

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────

DEFAULT_ROTOR_FILE = "./daily_key.enigma"
DEFAULT_PLUGBOARD_FILE = "./plugboard.toml"
DEFAULT_POSITIONS = "aaa"

debug = Debug()


@dataclass(slots=True)
class Config:
    """Resolved runtime settings for one invocation."""

    rotor_file: Path = Path(DEFAULT_ROTOR_FILE)
    plugboard_file: Path = Path(DEFAULT_PLUGBOARD_FILE)
    positions: str = DEFAULT_POSITIONS
    generate: bool = False            # write a fresh rotor key file
    generate_plugboard: bool = False  # write a plugboard template
    seed: int | None = None           # deterministic wheel generation
    debug: List[str] = field(default_factory=list)
    message: str | None = None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Config":
        return cls(
            rotor_file=Path(args.rotor_file),
            plugboard_file=Path(args.plugboard_file),
            positions=args.positions,
            generate=args.generate,
            generate_plugboard=args.generate_plugboard,
            seed=args.seed,
            debug=list(args.debug),
            message=args.message,
        )


# ────────────────────────────────────────────────────────────────────────
#  1. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="enigma",
        description="A three-rotor Enigma machine cipher with rotors and plugboard.",
    )
    p.add_argument("-g", "--generate", action="store_true", help="Generate new rotor configuration")
    p.add_argument("-p", "--generate-plugboard", dest="generate_plugboard", action="store_true", help="Generate plugboard configuration file")
    p.add_argument("-r", "--rotor-file", dest="rotor_file", metavar="FILE", default=DEFAULT_ROTOR_FILE, help=f"Path to rotor configuration file (default: {DEFAULT_ROTOR_FILE})")
    p.add_argument("-b", "--plugboard-file", dest="plugboard_file", metavar="FILE", default=DEFAULT_PLUGBOARD_FILE, help=f"Path to plugboard configuration file (default: {DEFAULT_PLUGBOARD_FILE})")
    p.add_argument("-s", "--start-positions", dest="positions", metavar="POSITIONS", default=DEFAULT_POSITIONS, help="Initial rotor positions (3 chars)")
    p.add_argument("--seed", type=int, help="Deterministic seed for --generate (omit for random)")
    p.add_argument("--debug", action="append", default=[], choices=COMPONENTS, metavar="COMPONENT", help=f"Log one component; repeatable ({', '.join(COMPONENTS)})")
    p.add_argument("message", nargs="?", help="Message to encrypt/decrypt")
    return p


def parse_args(argv: Sequence[str] | None = None) -> Config:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.message is None and not (args.generate or args.generate_plugboard):
        parser.error("the following arguments are required: message")
    return Config.from_args(args)


def fail(context: str, exc: EnigmaError) -> int:
    print(f"Error {context}: {exc}", file=sys.stderr)
    return 1


# ────────────────────────────────────────────────────────────────────────
#  2. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    cfg = parse_args(argv)

    debug.toggle_global(bool(cfg.debug))
    if cfg.debug:
        debug.enable(*cfg.debug)

    generated_something = False

    if cfg.generate:
        try:
            generate_rotors(cfg.rotor_file, build_rng(cfg.seed))
        except EnigmaError as exc:
            return fail("generating rotors", exc)
        print(f"Rotor configuration saved to: {cfg.rotor_file}")
        generated_something = True

    if cfg.generate_plugboard:
        try:
            generate_plugboard(cfg.plugboard_file)
        except EnigmaError as exc:
            return fail("generating plugboard", exc)
        print(f"Plugboard configuration generated at: {cfg.plugboard_file}")
        generated_something = True

    if generated_something:
        return 0

    try:
        machine = EnigmaMachine.from_files(
            cfg.rotor_file, cfg.plugboard_file, cfg.positions
        )
    except EnigmaError as exc:
        return fail("initializing Enigma machine", exc)

    try:
        print(machine.encode_message(cfg.message))
    except EnigmaError as exc:
        return fail("encoding message", exc)
    return 0


if __name__ == "__main__":
    sys.exit(main())
