"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XKK - Set VX = KK."""
    new_V = state.V.at[instruction.x].set(jnp.astype(instruction.kk, jnp.uint8))
    return state.replace(V=new_V, pc=state.pc + 2)


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XKK - Add KK to VX. Wraps, VF untouched."""
    new_V = state.V.at[instruction.x].add(jnp.astype(instruction.kk, jnp.uint8))
    return state.replace(V=new_V, pc=state.pc + 2)


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.nnn, jnp.uint16), pc=state.pc + 2)


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXKK - Set VX = random byte & KK."""
    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.bits(subkey, shape=(), dtype=jnp.uint8)
    new_V = state.V.at[instruction.x].set(random_value & jnp.astype(instruction.kk, jnp.uint8))
    return state.replace(V=new_V, rng=key, pc=state.pc + 2)
