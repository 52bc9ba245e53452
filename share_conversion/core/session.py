"""Phase-ordered party sessions.

Each protocol party (E2F or GHASH, Prover or Verifier) is an independent
class sharing one contract: an ordered sequence of phases, and a store of
named slots that is filled monotonically as phases complete.

- A phase may run only directly after its predecessor.
- A slot may be written once and never overwritten.
- Reading a slot that was never written is a caller ordering bug.

All three conditions raise ``PreconditionViolation``.
"""

import functools
from enum import IntEnum
from typing import Any, Callable, Dict, Optional, TypeVar

import numpy as np

from share_conversion.core.exceptions import PreconditionViolation
from share_conversion.utils.logging import get_protocol_logger

F = TypeVar("F", bound=Callable[..., Any])


class E2FPhase(IntEnum):
    """Phases of the E2F protocol, in execution order."""

    NEW = 0
    PREPROCESS1 = 1
    PREPROCESS2_OLE_INPUT = 2
    PREPROCESS2_OLE_OUTPUT = 3
    PREPROCESS3 = 4
    PREPROCESS4 = 5
    HANDSHAKE5_INPUT_EC = 6
    HANDSHAKE5_SET_OMEGA = 7
    HANDSHAKE6_SET_ETA = 8
    HANDSHAKE7_SET_Z = 9


class GhashPhase(IntEnum):
    """Phases of the GHASH share protocol, in execution order."""

    NEW = 0
    PREPROCESS_OLE_INPUT = 1
    PREPROCESS_OLE_OUTPUT = 2
    HANDSHAKE_A_SET_D = 3
    HANDSHAKE_A_SET_HI = 4


def phase_step(step: IntEnum) -> Callable[[F], F]:
    """Mark a method as the transition into ``step``.

    The wrapped method runs only if the session is exactly one phase
    before ``step``. The phase advances only when the method returns, so a
    method that raises leaves the session where it was.
    """

    def decorator(method: F) -> F:
        @functools.wraps(method)
        def wrapper(self: "PartySession", *args: Any, **kwargs: Any) -> Any:
            self._check_phase(step)
            result = method(self, *args, **kwargs)
            self._phase = step
            self._logger.debug(f"{step.name.lower()} complete")
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


class PartySession:
    """Base class for one party's protocol state.

    Parameters
    ----------
    initial_phase : IntEnum
        The ``NEW`` member of the protocol's phase enum.
    name : str
        Logger name, e.g. ``"e2f.prover"``.
    rng : np.random.Generator, optional
        Source of this party's private randomness. Uses default if None.

    Notes
    -----
    Sessions are single-use. A failed run must be discarded and a fresh
    session started from the first phase with new randomness.
    """

    def __init__(
        self,
        initial_phase: IntEnum,
        name: str,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self._phase = initial_phase
        self._slots: Dict[str, Any] = {}
        self._rng = rng if rng is not None else np.random.default_rng()
        self._logger = get_protocol_logger(name)

    @property
    def phase(self) -> IntEnum:
        """Return the last completed phase."""
        return self._phase

    def slot(self, name: str) -> Any:
        """Return the value of a written slot.

        Raises
        ------
        PreconditionViolation
            If the slot has not been written yet.
        """
        return self._require(name)

    def has_slot(self, name: str) -> bool:
        return name in self._slots

    def _check_phase(self, step: IntEnum) -> None:
        if self._phase != step - 1:
            raise PreconditionViolation(
                f"{type(self).__name__}: cannot enter {step.name} "
                f"after {self._phase.name}"
            )

    def _store(self, **values: Any) -> None:
        for name in values:
            if name in self._slots:
                raise PreconditionViolation(
                    f"{type(self).__name__}: slot '{name}' is already set"
                )
        self._slots.update(values)

    def _require(self, *names: str) -> Any:
        missing = [name for name in names if name not in self._slots]
        if missing:
            raise PreconditionViolation(
                f"{type(self).__name__}: slot(s) {', '.join(missing)} not set "
                f"(phase reached: {self._phase.name})"
            )
        if len(names) == 1:
            return self._slots[names[0]]
        return tuple(self._slots[name] for name in names)
