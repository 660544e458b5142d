"""Command line entry point."""

import argparse
import sys
from typing import List, Optional

import jax
from tqdm import tqdm

from chix8.driver import DriverConfig, run_emulator
from chix8.emulator import run_cycles
from chix8.errors import Chip8Error
from chix8.logging import EmulatorLogger
from chix8.rendering import create_color_scheme, save_frame
from chix8.state import create_state, load_rom, read_rom

HEADLESS_CHUNK = 1000


def positive_int(value: str) -> int:
    """argparse type for options that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chix8", description="CHIP-8 emulator")
    parser.add_argument("rom", help="path to the ROM file")
    parser.add_argument("--scale", type=positive_int, default=8, help="window pixels per CHIP-8 pixel")
    parser.add_argument("--frequency", type=positive_int, default=600, help="instructions per second")
    parser.add_argument("--fps", type=positive_int, default=60, help="frames per second")
    parser.add_argument("--color-scheme", default="classic", help="display colors")
    parser.add_argument("--seed", type=int, default=0, help="seed for the CXKK random generator")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--headless", type=int, metavar="CYCLES",
                        help="run CYCLES instructions without a window and exit")
    parser.add_argument("--screenshot", metavar="PATH",
                        help="with --headless, save the final frame to PATH")
    return parser


def run_headless(rom_filename: str, cycles: int, config: DriverConfig, logger: EmulatorLogger,
                 screenshot: Optional[str] = None) -> int:
    """Run a fixed number of cycles in chunks, reporting progress.

    Returns the process exit code.
    """
    rom_data = read_rom(rom_filename)
    state = load_rom(create_state(jax.random.PRNGKey(config.seed)), rom_data)
    logger.log_rom_loaded(rom_filename, len(rom_data))

    with tqdm(total=cycles, desc="Emulating", unit="cycle", disable=None) as progress:
        remaining = cycles
        while remaining > 0:
            chunk = min(HEADLESS_CHUNK, remaining)
            state = run_cycles(state, chunk)
            progress.update(chunk)
            remaining -= chunk

    logger.info(f"Ran {cycles} cycles")
    logger.log_state_summary(state, level="INFO")

    if screenshot:
        try:
            save_frame(state.display, screenshot, config.scale, config.color_scheme)
        except (OSError, ValueError) as e:
            logger.error(f"Cannot save frame to {screenshot}: {e}")
            return 1
        logger.info(f"Saved frame to {screenshot}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = EmulatorLogger(log_level=args.log_level)

    try:
        create_color_scheme(args.color_scheme)
    except ValueError as e:
        logger.error(str(e))
        return 2

    config = DriverConfig(
        scale=args.scale,
        frequency=args.frequency,
        fps=args.fps,
        color_scheme=args.color_scheme,
        seed=args.seed,
    )

    try:
        if args.headless is not None:
            return run_headless(args.rom, args.headless, config, logger, args.screenshot)
        run_emulator(args.rom, config, logger)
    except Chip8Error as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
