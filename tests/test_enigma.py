import pytest

from conftest import shifted
from enigma import NOTCH_POSITIONS, EnigmaMachine
from errors import (
    FileError,
    InvalidMessage,
    InvalidPlugboardPair,
    InvalidRotorPosition,
    InvalidRotorWiring,
)
from keyboard_and_plugboard import ALPHABET, Plugboard
from utilities import RotorState, save_rotor_state


def roundtrip(state, message, plugs=None, positions="aaa"):
    cipher = EnigmaMachine(state, plugs, positions).encode_message(message)
    plain = EnigmaMachine(state, plugs, positions).encode_message(cipher)
    return cipher, plain


# ── reciprocity ──────────────────────────────────────────────────

def test_hello_roundtrip(shifted_state):
    cipher, plain = roundtrip(shifted_state, "HELLO ")
    assert len(cipher) == 6
    assert all(c in ALPHABET for c in cipher)
    assert plain == "HELLO "


@pytest.mark.parametrize("positions", ["aaa", "pea", "qe ", "Zz "])
def test_roundtrip_with_plugboard(random_state, positions):
    message = "The quick brown fox jumps over the lazy dog " * 5
    plugs = ["ab", "CD", "X ", "qZ"]
    cipher, plain = roundtrip(random_state, message, plugs, positions)
    assert plain == message
    assert cipher != message


def test_every_symbol_roundtrips_across_many_ticks(random_state):
    message = ALPHABET.symbols * 60
    _, plain = roundtrip(random_state, message, ["mN"], "xyz")
    assert plain == message


def test_same_symbol_is_not_enciphered_the_same_way_twice_in_a_row(random_state):
    cipher = EnigmaMachine(random_state).encode_message("a" * 200)
    assert len(set(cipher)) > 1


def test_machines_share_wiring_but_not_positions(random_state):
    first = EnigmaMachine(random_state)
    second = EnigmaMachine(random_state)
    first.encode_message("abc")
    assert first.positions == "daa"
    assert second.positions == "aaa"


def test_no_reset_between_messages(random_state):
    machine = EnigmaMachine(random_state)
    whole = EnigmaMachine(random_state).encode_message("abcdef")
    assert machine.encode_message("abc") + machine.encode_message("def") == whole


# ── stepping ─────────────────────────────────────────────────────

def test_notch_constants():
    assert NOTCH_POSITIONS == (16, 4, 21)
    machine = EnigmaMachine(RotorState(shifted(1), shifted(2), shifted(3)))
    assert [r.notch_position for r in machine.rotors] == [16, 4, 21]


def test_fast_rotor_steps_on_every_character(shifted_state):
    machine = EnigmaMachine(shifted_state)
    machine.encode_message("abc")
    assert machine.positions == "daa"


def test_stepping_happens_before_enciphering(shifted_state):
    machine = EnigmaMachine(shifted_state)
    machine.encode_char("a")
    assert machine.rotor1.position == 1


def test_slow_rotor_carries_once(shifted_state):
    # rotor2 on its notch, rotor1 one short of its notch
    machine = EnigmaMachine(shifted_state, positions="pea")
    start = machine.rotor3.position
    machine.encode_message("xy")
    assert machine.rotor3.position == start + 1
    assert machine.positions == "rgb"


def test_middle_rotor_double_steps_on_consecutive_ticks(shifted_state):
    machine = EnigmaMachine(shifted_state, positions="pda")
    machine.encode_char("a")
    assert machine.positions == "qda"
    machine.encode_char("a")
    assert machine.positions == "rea"     # carry from rotor1
    machine.encode_char("a")
    assert machine.positions == "sfb"     # rotor2 steps again, rotor3 follows


def test_both_notches_at_once_step_middle_rotor_twice(shifted_state):
    machine = EnigmaMachine(shifted_state, positions="qea")
    machine.encode_char("a")
    assert machine.positions == "rgb"


# ── errors ───────────────────────────────────────────────────────

def test_empty_message_is_rejected(shifted_state):
    with pytest.raises(InvalidMessage, match="Empty message"):
        EnigmaMachine(shifted_state).encode_message("")


@pytest.mark.parametrize("positions", ["", "aa", "aaaa"])
def test_positions_must_be_three_symbols(shifted_state, positions):
    with pytest.raises(InvalidMessage, match="3 characters"):
        EnigmaMachine(shifted_state, positions=positions)


def test_unknown_start_symbol(shifted_state):
    with pytest.raises(InvalidRotorPosition):
        EnigmaMachine(shifted_state, positions="a!a")


def test_invalid_symbol_does_not_step(shifted_state):
    machine = EnigmaMachine(shifted_state)
    with pytest.raises(InvalidMessage, match="Invalid character: !"):
        machine.encode_char("!")
    assert machine.positions == "aaa"


def test_invalid_symbol_keeps_earlier_stepping(shifted_state):
    machine = EnigmaMachine(shifted_state)
    with pytest.raises(InvalidMessage):
        machine.encode_message("ab!c")
    assert machine.positions == "caa"


def test_fixed_point_wiring_is_rejected_at_construction():
    with pytest.raises(InvalidRotorWiring):
        EnigmaMachine(RotorState(shifted(1), ALPHABET.symbols, shifted(3)))


def test_exactly_three_wirings_required():
    with pytest.raises(ValueError):
        EnigmaMachine([shifted(1), shifted(2)])


def test_plugboard_pairs_are_validated(shifted_state):
    with pytest.raises(InvalidPlugboardPair):
        EnigmaMachine(shifted_state, ["ab", "ab"])


def test_plugboard_instance_is_used_as_is(shifted_state):
    board = Plugboard.from_pairs(["ab"])
    machine = EnigmaMachine(shifted_state, board)
    assert machine.plugboard is board


# ── files ────────────────────────────────────────────────────────

def test_from_files_without_plugboard_file(tmp_path, random_state):
    key = save_rotor_state(random_state, tmp_path / "daily_key.enigma")
    machine = EnigmaMachine.from_files(key, tmp_path / "missing.toml", "abc")
    assert machine.plugboard.pairs() == []
    assert machine.positions == "abc"


def test_from_files_with_plugboard_file(tmp_path, random_state):
    key = save_rotor_state(random_state, tmp_path / "daily_key.enigma")
    board = tmp_path / "plugboard.toml"
    board.write_text('pairs = ["ab", "X "]\n', encoding="utf-8")

    cipher = EnigmaMachine.from_files(key, board).encode_message("Hello World")
    expected = EnigmaMachine(random_state, ["ab", "X "]).encode_message("Hello World")
    assert cipher == expected


def test_from_files_missing_key(tmp_path):
    with pytest.raises(FileError, match="not found"):
        EnigmaMachine.from_files(tmp_path / "nope.enigma")
