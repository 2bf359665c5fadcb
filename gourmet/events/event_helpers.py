"""Event helper utilities.

Typed wrappers around the event bus so publishers do not build payload
dicts by hand. Each helper takes an optional ``bus`` (defaults to the global one).

Quick import:
    from gourmet.events.event_helpers import (
        publish_storage_degraded, publish_storage_restored,
        publish_recipe_imported, publish_import_failed
    )
"""
from __future__ import annotations
from typing import Optional

from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    STORAGE_DEGRADED, STORAGE_RESTORED, RECIPE_IMPORTED, IMPORT_FAILED
)

__all__ = [
    'publish_storage_degraded', 'publish_storage_restored',
    'publish_recipe_imported', 'publish_import_failed',
]


def publish_storage_degraded(reason: str, bus: Optional[EventBus] = None):
    """Publish a storage.degraded event (backend lost, now working on the local cache)."""
    (bus or GLOBAL_EVENT_BUS).publish(STORAGE_DEGRADED, {'reason': reason, 'mode': 'local'})


def publish_storage_restored(bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(STORAGE_RESTORED, {'mode': 'backend'})


def publish_recipe_imported(url: str, dish_id: str, name: str, bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(RECIPE_IMPORTED, {'url': url, 'dish_id': dish_id, 'name': name})


def publish_import_failed(url: str, kind: str, error: str, bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(IMPORT_FAILED, {'url': url, 'kind': kind, 'error': error})
