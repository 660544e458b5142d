"""Console logging utilities for the emulator driver and CLI.

The jitted core never logs; the driver and command line report ROM loads,
configuration and machine state through these loggers.
"""

import sys
import time
from typing import Any, Dict

from chix8.state import EmulatorState

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
}
RESET_COLOR = "\033[0m"


class ConsoleLogger:
    """Line-oriented logger with level filtering, writing to a text stream.

    Colors are only used when the stream is a terminal.
    """

    def __init__(self, name: str = "chix8", log_level: str = "INFO", use_colors: bool = True,
                 show_timestamps: bool = True, stream=None):
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream if stream is not None else sys.stdout
        self.use_colors = use_colors and getattr(self.stream, "isatty", lambda: False)()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _should_log(self, level: str) -> bool:
        threshold = LEVELS.index(self.log_level) if self.log_level in LEVELS else 1
        return LEVELS.index(level.upper()) >= threshold

    def _format_message(self, level: str, message: str) -> str:
        timestamp = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{LEVEL_COLORS[level]}{level_str}{RESET_COLOR}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        if self._should_log(level):
            print(self._format_message(level.upper(), message), file=self.stream, flush=True)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)


class EmulatorLogger(ConsoleLogger):
    """Logger with helpers for emulator events."""

    def log_config(self, config: Dict[str, Any]):
        """Log the driver configuration."""
        self.info("=" * 60)
        self.info("Starting emulator with configuration:")
        for key, value in config.items():
            self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_rom_loaded(self, filename: str, size: int):
        self.info(f"Loaded {filename} ({size} bytes)")

    def log_state_summary(self, state: EmulatorState, level: str = "DEBUG"):
        """Log registers, timers and stack depth of a state."""
        if not self._should_log(level):
            return
        self.log(
            level,
            f"PC=0x{int(state.pc):04X} I=0x{int(state.I):04X} "
            f"SP={int(state.stack.pointer)} DT={int(state.delay_timer)} ST={int(state.sound_timer)}",
        )
        registers = " ".join(f"V{i:X}={int(v):02X}" for i, v in enumerate(state.V.tolist()))
        self.log(level, registers)
