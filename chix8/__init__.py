"""CHIP-8 emulator package."""

from chix8.state import (
    EmulatorState, StackState, create_state, reset, load_rom, load_rom_file, read_rom,
    set_key, release_all_keys, clear_draw_flag,
)
from chix8.emulator import execute, fetch, step, run_cycles, tick_timers
from chix8.decode import DecodedInstruction, decode
from chix8.errors import Chip8Error, RomTooLarge, RomUnreadable, InvalidKeyIndex
from chix8.constants import *
from chix8.framebuffer import draw_sprite, unpack_display, pack_display, get_pixel
from chix8.rendering import display_to_rgb, create_color_scheme, save_frame

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "reset",
    "load_rom",
    "load_rom_file",
    "read_rom",
    "set_key",
    "release_all_keys",
    "clear_draw_flag",
    "fetch",
    "execute",
    "step",
    "run_cycles",
    "tick_timers",
    "DecodedInstruction",
    "decode",
    "Chip8Error",
    "RomTooLarge",
    "RomUnreadable",
    "InvalidKeyIndex",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "MAX_ROM_SIZE",
    "draw_sprite",
    "unpack_display",
    "pack_display",
    "get_pixel",
    "display_to_rgb",
    "create_color_scheme",
    "save_frame",
]
