"""Simple Event Bus / Observer implementation for storage and import notifications.

Event names used so far:
  storage.degraded -> payload {"reason": str, "mode": "local"}
  storage.restored -> payload {"mode": "backend"}
  recipe.imported  -> payload {"url": str, "dish_id": str, "name": str}
  recipe.import_failed -> payload {"url": str, "kind": str, "error": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
STORAGE_DEGRADED = "storage.degraded"
STORAGE_RESTORED = "storage.restored"
RECIPE_IMPORTED = "recipe.imported"
IMPORT_FAILED = "recipe.import_failed"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any = None):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
	'STORAGE_DEGRADED', 'STORAGE_RESTORED', 'RECIPE_IMPORTED', 'IMPORT_FAILED'
]
