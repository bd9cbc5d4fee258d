"""
Event channel for fire-and-forget notifications.

Events raised by the interpreter:

    refreshTree       redraw the commit tree        (no payload)
    rollupCommands    combine the last N commands   (N as a string)
    commandSubmitted  run a command string          (the command)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class EventChannel:

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def on(self, event_name: str, callback: Listener) -> None:
        self._listeners[event_name].append(callback)

    def off(self, event_name: str, callback: Listener) -> None:
        listeners = self._listeners.get(event_name, [])
        if callback in listeners:
            listeners.remove(callback)

    def notify(self, event_name: str, payload: Any = None) -> None:
        """Call every listener of ``event_name``. Return values are ignored.

        Listeners registered with no payload argument are called bare.
        """
        listeners = list(self._listeners.get(event_name, []))
        logger.debug(f"Event {event_name!r} payload={payload!r} listeners={len(listeners)}")
        for callback in listeners:
            if payload is None:
                callback()
            else:
                callback(payload)

