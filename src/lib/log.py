"""
Centralized logging using Loguru with context-aware verbosity.

LOG() checks the verbosity of the ProgramState bound to the current
context, so the tokenizer and pattern table can log without a state being
passed through every call.

Usage:
    from studiolex.lib.log import LOG, logger_configure, state_connectToLogger

    # Once, in the CLI entry point:
    logger_configure()

    # At start of a pipeline stage:
    state_connectToLogger(state)

    # Anywhere below it:
    LOG("Tokenized 42 spans", level=2)
    LOG("push paren @ 17", level=3)

Library callers that never connect a state get no output from LOG().
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)


def logger_configure() -> None:
    """
    Replace loguru's handlers with the studiolex stderr format.

    Only the CLI calls this. Importing the library, directly or through the
    Pygments plugin, leaves the host application's handlers alone.
    """
    logger.remove()
    logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Bind a ProgramState to the logging context.

    Args:
        state: Object with a `verbosity` attribute (normally ProgramState)
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the bound state, or 0 when none is bound"""
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the bound state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity required (1=normal, 2=verbose, 3=trace)
        **kwargs: Additional loguru arguments

    Verbosity levels:
        1 = Pipeline progress
        2 = Table builds, token counts
        3 = Every state push and pop
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
