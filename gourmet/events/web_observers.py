"""Web-facing observers for storage and import events.

Subscribes to the GLOBAL_EVENT_BUS and keeps:
  * the current storage status shown in the offline banner
    (backend reachable or working on the local cache), and
  * a small in-memory ring buffer of recent events that polling clients
    query with since=<last_id_seen>.

State is per process; a Lock guards it because uvicorn may serve requests
from worker threads.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, STORAGE_DEGRADED, STORAGE_RESTORED, RECIPE_IMPORTED, IMPORT_FAILED
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 200
_started = False
_status: Dict[str, Any] = {'mode': 'backend', 'offline': False, 'reason': None, 'since': None}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {'id': _next_id, 'type': event_name, 'ts': _now()}
        if isinstance(payload, dict):
            for k in ('url', 'name', 'dish_id', 'kind', 'error', 'reason', 'mode'):
                if k in payload:
                    evt[k] = payload[k]
        if event_name == STORAGE_DEGRADED:
            _status.update(mode='local', offline=True, reason=evt.get('reason'), since=evt['ts'])
        elif event_name == STORAGE_RESTORED:
            _status.update(mode='backend', offline=False, reason=None, since=evt['ts'])
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in (STORAGE_DEGRADED, STORAGE_RESTORED, RECIPE_IMPORTED, IMPORT_FAILED):
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_status() -> Dict[str, Any]:
    with _lock:
        return dict(_status)


def get_events(since: Optional[int] = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), plus next_cursor for the next poll."""
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'get_status']
