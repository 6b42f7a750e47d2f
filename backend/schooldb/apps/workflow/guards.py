from __future__ import annotations

from typing import Any, Dict, List

GuardResult = List[Dict[str, str]]


def _get_value(obj: Any, key: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def guard_rejection_note(
    *,
    before_obj: Any,
    after_obj: Any,
    from_state: str,
    to_state: str,
) -> GuardResult:
    note = _get_value(after_obj, "approver_note")
    if not note or not str(note).strip():
        return [{"field": "approver_note", "reason": "a reason is required to reject"}]
    return []
