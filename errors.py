# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every failure raised by the machine and its files."""

    label = "Enigma error"

    def __init__(self, detail: object) -> None:
        self.detail = detail
        super().__init__(f"{self.label}: {detail}")


class InvalidRotorPosition(EnigmaError):
    label = "Invalid rotor position"


class InvalidMessage(EnigmaError):
    label = "Invalid message"


class InvalidPlugboardPair(EnigmaError):
    label = "Invalid plugboard pair"


class InvalidRotorWiring(EnigmaError):
    label = "Invalid rotor wiring"


class FileError(EnigmaError):
    label = "File error"


class SerializationError(EnigmaError):
    label = "Serialization error"


__all__ = [
    "EnigmaError",
    "InvalidRotorPosition",
    "InvalidMessage",
    "InvalidPlugboardPair",
    "InvalidRotorWiring",
    "FileError",
    "SerializationError",
]
