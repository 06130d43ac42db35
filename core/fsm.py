"""
core/fsm.py — Strict finite state machine for the decode pipeline.

Every decode call owns one DecodeFSM. The machine only accepts the edges in
the explicit transition map, keeps a full history of the run, and remembers
which stage was active when the pipeline fell into INVALID.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from core.constants import DecodeState

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────
# Custom exception
# ──────────────────────────────────────────────────────────────

class InvalidTransitionError(RuntimeError):
    """
    Raised when a requested transition is not in the valid transition map.

    Args:
        from_state: Current state at the time of the illegal attempt.
        to_state: Requested (invalid) target state.
        reason: Caller-supplied reason string.
    """

    def __init__(
        self,
        from_state: DecodeState,
        to_state: DecodeState,
        reason: str = "",
    ) -> None:
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason
        super().__init__(
            f"Invalid transition {from_state.value} → {to_state.value}"
            + (f" (reason: {reason})" if reason else "")
        )


# ──────────────────────────────────────────────────────────────
# Valid transition map — single source of truth
# ──────────────────────────────────────────────────────────────

_VALID_TRANSITIONS: dict[DecodeState, list[DecodeState]] = {
    DecodeState.START: [
        DecodeState.SPLIT,
    ],
    DecodeState.SPLIT: [
        DecodeState.BLOCK_CHECK,
    ],
    DecodeState.BLOCK_CHECK: [
        DecodeState.LENGTH_CHECK,
        DecodeState.INVALID,
    ],
    DecodeState.LENGTH_CHECK: [
        DecodeState.DECODE,
        DecodeState.INVALID,
    ],
    DecodeState.DECODE: [
        DecodeState.DONE,
    ],
    DecodeState.INVALID: [],
    DecodeState.DONE: [],
}

TERMINAL_STATES: frozenset[DecodeState] = frozenset(
    state for state, targets in _VALID_TRANSITIONS.items() if not targets
)


# ──────────────────────────────────────────────────────────────
# FSM class
# ──────────────────────────────────────────────────────────────

class DecodeFSM:
    """
    Finite state machine tracking one validate-then-decode run.

    Enforces :data:`_VALID_TRANSITIONS`; illegal transitions raise
    :class:`InvalidTransitionError` immediately. INVALID and DONE are
    terminal — only :meth:`reset` leaves them.

    Args:
        on_transition: Optional callback invoked after every successful
            transition with signature ``(from_state, to_state, reason)``.
    """

    def __init__(
        self,
        on_transition: Callable[[DecodeState, DecodeState, str], None] | None = None,
    ) -> None:
        self._state: DecodeState = DecodeState.START
        self._lock = threading.Lock()
        self._history: list[dict] = []
        self._external_callback = on_transition
        self._failed_stage: DecodeState | None = None

    # ──────────────────────────────────────────
    # Public API
    # ──────────────────────────────────────────

    @property
    def current_state(self) -> DecodeState:
        """Return the current pipeline state."""
        with self._lock:
            return self._state

    @property
    def failed_stage(self) -> DecodeState | None:
        """
        Return the stage that transitioned into INVALID, if any.

        Returns:
            ``BLOCK_CHECK`` or ``LENGTH_CHECK`` after a rejection,
            ``None`` while the run has not failed.
        """
        with self._lock:
            return self._failed_stage

    @property
    def is_terminal(self) -> bool:
        """True once the run reached INVALID or DONE."""
        return self.current_state in TERMINAL_STATES

    def transition(self, new_state: DecodeState, reason: str = "") -> None:
        """
        Attempt a validated state transition.

        Args:
            new_state: Target state to transition to.
            reason: Human-readable reason for the transition (for logs/history).

        Raises:
            InvalidTransitionError: If the transition is not in the valid map.
        """
        with self._lock:
            from_state = self._state
            if new_state not in _VALID_TRANSITIONS.get(from_state, []):
                raise InvalidTransitionError(from_state, new_state, reason)

            self._state = new_state
            if new_state is DecodeState.INVALID:
                self._failed_stage = from_state
            self._history.append({
                "from": from_state.value,
                "to": new_state.value,
                "reason": reason,
                "timestamp": time.time(),
            })

        logger.debug(
            "DecodeFSM: %s → %s%s",
            from_state.value,
            new_state.value,
            f" [{reason}]" if reason else "",
        )

        if self._external_callback is not None:
            self._external_callback(from_state, new_state, reason)

    def reset(self) -> None:
        """
        Force the machine back to START unconditionally and clear history.

        Bypasses the transition map (does NOT raise InvalidTransitionError).
        """
        with self._lock:
            self._state = DecodeState.START
            self._failed_stage = None
            self._history.clear()
        logger.debug("DecodeFSM: RESET → START")

    def get_history(self) -> list[dict]:
        """
        Return a copy of the transition records of this run, oldest first.

        Each record is a dict with keys ``from``, ``to``, ``reason`` and
        ``timestamp`` (Unix epoch float).
        """
        with self._lock:
            return list(self._history)

    def can_transition(self, target: DecodeState) -> bool:
        """Check whether a transition to ``target`` is currently valid."""
        return target in _VALID_TRANSITIONS.get(self.current_state, [])

    def __repr__(self) -> str:
        with self._lock:
            state_str = self._state.value
            if self._history:
                last_rec = self._history[-1]
                last = f"{last_rec['from']}→{last_rec['to']}"
            else:
                last = "none"
        return f"DecodeFSM(state={state_str}, last={last})"
