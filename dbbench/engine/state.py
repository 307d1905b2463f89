from dataclasses import dataclass
from enum import Enum


class IterationPhase(str, Enum):
    WARMUP = "warmup"
    MEASURED = "measured"


@dataclass
class IterationState:
    """
    Per-run context handed to every lifecycle hook of an iteration.

    The engine creates one instance per run through ``Operation.make_state``
    and updates ``ordinal`` and ``phase`` in place before each iteration.
    Operations that need to pass data from ``timed_body`` to ``after_each``
    subclass it and add their own fields.
    """

    ordinal: int = 0
    phase: IterationPhase = IterationPhase.WARMUP
