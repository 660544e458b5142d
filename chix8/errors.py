"""CHIP-8 emulator errors."""


class Chip8Error(Exception):
    """Base class for errors raised by the emulator."""


class RomTooLarge(Chip8Error, ValueError):
    """ROM does not fit between the program start and the end of memory."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"ROM is {size} bytes, maximum is {limit} bytes")
        self.size = size
        self.limit = limit


class RomUnreadable(Chip8Error, OSError):
    """ROM file could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read ROM '{path}': {reason}")
        self.path = path


class InvalidKeyIndex(Chip8Error, IndexError):
    """Keypad index outside 0x0-0xF."""

    def __init__(self, index):
        super().__init__(f"Key index {index!r} is outside [0, 16)")
        self.index = index
