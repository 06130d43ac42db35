"""
pipeline/controller.py — CipherController: interactive encode/decode command loop.

A thin adapter around :func:`encoder.encode` and :func:`decoder.decode`::

    operation prompt ─► encode ─► print token stream
                     ├► decode ─► print text | "Encoded string is not valid"
                     └► exit   ─► "Bye"

Console I/O is injected (``input_fn`` / ``output_fn``) so the loop can be
driven by tests or by a different front end. A small event bus lets callers
observe results without reading the console.
"""

from __future__ import annotations

import time
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from core.config import CipherConfig
from core.logger import get_logger
from decoder import decode
from encoder import UnsupportedCharacterError, encode

# ── EventBus event-name constants ─────────────────────────────────────────────

ON_ENCODED = "ON_ENCODED"
"""Fired after a line of text was encoded."""

ON_DECODED = "ON_DECODED"
"""Fired after an encoded line was decoded successfully."""

ON_INVALID = "ON_INVALID"
"""Fired when a decode was rejected or an encode hit an unsupported character."""


class CipherController:
    """
    Read-eval loop dispatching console operations to the cipher core.

    Args:
        config: Loaded :class:`~core.config.CipherConfig`; defaults apply
            when omitted.
        input_fn: Returns the next input line; raises :class:`EOFError` at
            end of input. Defaults to :func:`input`.
        output_fn: Receives each output line. Defaults to :func:`print`.

    Example::

        ctrl = CipherController()
        ctrl.subscribe(ON_DECODED, lambda d: print("got", d["text"]))
        ctrl.run()
    """

    def __init__(
        self,
        config: Optional[CipherConfig] = None,
        input_fn: Callable[[], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self._config = config if config is not None else CipherConfig()
        self._console = self._config.console
        self._input = input_fn
        self._output = output_fn
        self._log = get_logger()
        self._subscribers: Dict[str, List[Callable[[Dict[str, Any]], None]]] = defaultdict(list)
        self._stats: Dict[str, int] = defaultdict(int)
        self._running = False

    # ── EventBus ──────────────────────────────────────────────────────────────

    def subscribe(self, event: str, callback: Callable[[Dict[str, Any]], None]) -> None:
        """
        Register *callback* to receive payloads whenever *event* is published.

        Args:
            event:    One of the ``ON_*`` module-level constants.
            callback: Callable ``(data: dict) → None``.
        """
        self._subscribers[event].append(callback)

    def publish(self, event: str, data: Dict[str, Any]) -> None:
        """Dispatch *event* to all registered callbacks with payload *data*."""
        for cb in self._subscribers.get(event, []):
            cb(data)

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    @property
    def stats(self) -> Dict[str, int]:
        """Counts of handled operations keyed by outcome."""
        return dict(self._stats)

    def run(self) -> None:
        """
        Prompt for operations until the exit word or end of input.

        **Blocking** — returns after printing the goodbye message.
        """
        self._running = True
        self._log.info("controller", "run_start", {})
        while self._running:
            self._output(self._console.operation_prompt)
            operation = self._read()
            if operation is None or operation == self._console.exit_word:
                break
            self.handle(operation)
        self.shutdown()

    def shutdown(self) -> None:
        """Print the goodbye message and flush the structured log."""
        self._running = False
        self._output(self._console.bye_message)
        self._log.info("controller", "shutdown", {"stats": self.stats})
        self._log.flush()

    def handle(self, operation: str) -> None:
        """Dispatch one operation word read from the console."""
        self._log.info("controller", "operation_received", {"operation": operation})
        if operation == "encode":
            self._do_encode()
        elif operation == "decode":
            self._do_decode()
        else:
            self._stats["unknown"] += 1
            self._log.info("controller", "unknown_operation", {"operation": operation})
            self._output(f"There is no '{operation}' operation\n")

    # ── Operations ────────────────────────────────────────────────────────────

    def _do_encode(self) -> None:
        self._output(self._console.encode_prompt)
        text = self._read()
        if text is None:
            self._running = False
            return

        _t = time.perf_counter()
        try:
            encoded = encode(text)
        except UnsupportedCharacterError as exc:
            self._stats["encode_rejected"] += 1
            self._log.warn("controller", "unsupported_character", {
                "position": exc.position,
                "code": exc.code,
            })
            self.publish(ON_INVALID, {"operation": "encode", "error": str(exc)})
            self._output(f"Unsupported character {exc.char!r} at position {exc.position}\n")
            return

        self._stats["encoded"] += 1
        self._log.perf("controller", "encode_done",
                       (time.perf_counter() - _t) * 1_000.0, {"chars": len(text)})
        self.publish(ON_ENCODED, {"text": text, "encoded": encoded})
        self._output(self._console.encoded_header)
        self._output(encoded + "\n")

    def _do_decode(self) -> None:
        self._output(self._console.decode_prompt)
        line = self._read()
        if line is None:
            self._running = False
            return

        _t = time.perf_counter()
        result = decode(line)
        latency_ms = (time.perf_counter() - _t) * 1_000.0

        if result.error is not None:
            self._stats["decode_rejected"] += 1
            self._log.warn("controller", "decode_invalid", result.error.to_dict())
            self.publish(ON_INVALID, {"operation": "decode", "error": result.error.message})
            self._output(self._console.invalid_message + "\n")
            return

        self._stats["decoded"] += 1
        self._log.perf("controller", "decode_done", latency_ms, {"chars": len(result.text or "")})
        self.publish(ON_DECODED, {"encoded": line, "text": result.text})
        self._output(self._console.decoded_header)
        self._output(f"{result.text}\n")

    def _read(self) -> Optional[str]:
        """Read one line, returning ``None`` at end of input."""
        try:
            return self._input()
        except EOFError:
            self._log.info("controller", "end_of_input", {})
            return None
