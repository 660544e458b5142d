"""Pygame driver loop: window, keypad, beeper and pacing around the core."""

import os
from dataclasses import dataclass, asdict
from typing import Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import jax
import numpy as np
import pygame

from chix8.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chix8.emulator import run_cycles
from chix8.logging import EmulatorLogger
from chix8.rendering import display_to_rgb, create_color_scheme
from chix8.state import EmulatorState, create_state, load_rom, read_rom, set_key, clear_draw_flag

# Logical key 0x0-0xF -> physical key
KEYPAD_LAYOUT = [
    pygame.K_x, pygame.K_1, pygame.K_2, pygame.K_3,
    pygame.K_q, pygame.K_w, pygame.K_e, pygame.K_a,
    pygame.K_s, pygame.K_d, pygame.K_z, pygame.K_c,
    pygame.K_4, pygame.K_r, pygame.K_f, pygame.K_v,
]
KEY_MAP = {key: index for index, key in enumerate(KEYPAD_LAYOUT)}

QUIT_KEY = pygame.K_ESCAPE
RESTART_KEY = pygame.K_F1
PAUSE_KEY = pygame.K_p

SAMPLE_RATE = 44100
TONE_FREQUENCY = 440


@dataclass(frozen=True)
class DriverConfig:
    """Settings for the interactive driver."""
    scale: int = 8
    frequency: int = 600
    fps: int = 60
    color_scheme: str = "classic"
    seed: int = 0
    volume: float = 0.1

    def __post_init__(self):
        for name in ("scale", "frequency", "fps"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be a positive integer, got {getattr(self, name)}")

    @property
    def cycles_per_frame(self) -> int:
        return max(1, self.frequency // self.fps)


def build_beep_samples(sample_rate: int = SAMPLE_RATE, frequency: int = TONE_FREQUENCY) -> np.ndarray:
    """One period of a 16-bit mono square wave."""
    period = int(round(sample_rate / frequency))
    amplitude = 2 ** 15 - 1
    samples = np.full(period, -amplitude, dtype=np.int16)
    samples[:period // 2] = amplitude
    return samples


def handle_key_event(state: EmulatorState, event: pygame.event.Event) -> EmulatorState:
    """Forward a keypad key press or release into the machine state."""
    if event.type not in (pygame.KEYDOWN, pygame.KEYUP) or event.key not in KEY_MAP:
        return state
    return set_key(state, KEY_MAP[event.key], event.type == pygame.KEYDOWN)


def present(screen: pygame.Surface, state: EmulatorState, config: DriverConfig) -> None:
    """Draw the framebuffer onto the window."""
    on_color, off_color = create_color_scheme(config.color_scheme)
    frame = display_to_rgb(state.display, config.scale, on_color, off_color)
    screen.blit(pygame.surfarray.make_surface(frame.swapaxes(0, 1)), (0, 0))
    pygame.display.flip()


def _init_beep(config: DriverConfig, logger: EmulatorLogger) -> Optional[pygame.mixer.Sound]:
    try:
        pygame.mixer.init(SAMPLE_RATE, -16, 1, 512)
    except pygame.error as e:
        logger.warning(f"Audio disabled: {e}")
        return None
    beep = pygame.mixer.Sound(buffer=build_beep_samples())
    beep.set_volume(config.volume)
    return beep


def run_emulator(rom_filename: str, config: DriverConfig = DriverConfig(), logger: EmulatorLogger = None) -> None:
    """Main emulator loop.

    Runs ``config.cycles_per_frame`` cycles per frame at ``config.fps`` frames
    per second. Escape or closing the window quits, F1 restarts the ROM and P
    pauses.
    """
    logger = logger or EmulatorLogger()

    rom_data = read_rom(rom_filename)
    state = load_rom(create_state(jax.random.PRNGKey(config.seed)), rom_data)
    logger.log_rom_loaded(rom_filename, len(rom_data))
    logger.log_config(asdict(config))

    pygame.init()
    beep = None
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH * config.scale, SCREEN_HEIGHT * config.scale))
        pygame.display.set_caption(f"chix8 - {os.path.basename(rom_filename)}")
        clock = pygame.time.Clock()
        beep = _init_beep(config, logger)
        beeping = False

        running = True
        paused = False
        present(screen, state, config)

        while running:
            clock.tick(config.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == QUIT_KEY:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == RESTART_KEY:
                    state = load_rom(state, rom_data)
                    logger.info("Restarted")
                elif event.type == pygame.KEYDOWN and event.key == PAUSE_KEY:
                    paused = not paused
                    logger.info("Paused" if paused else "Resumed")
                    logger.log_state_summary(state)
                else:
                    state = handle_key_event(state, event)

            if not running or paused:
                continue

            state = run_cycles(state, config.cycles_per_frame)

            if state.draw:
                present(screen, state, config)
                state = clear_draw_flag(state)

            sound_on = bool(state.sound_timer > 0)
            if beep is not None and sound_on != beeping:
                if sound_on:
                    beep.play(loops=-1)
                else:
                    beep.stop()
                beeping = sound_on
    finally:
        if beep is not None:
            beep.stop()
        pygame.quit()
        logger.info("Emulator closed")
