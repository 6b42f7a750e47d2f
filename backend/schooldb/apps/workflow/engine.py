from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .registry import WORKFLOWS

logger = logging.getLogger(__name__)


@dataclass
class TransitionError(Exception):
    code: str
    detail: List[Dict[str, str]]

    def __str__(self) -> str:
        reasons = "; ".join(item.get("reason", "") for item in self.detail)
        return f"{self.code}: {reasons}" if reasons else self.code


def check_transition(
    *,
    actor_user_id: Optional[str],
    entity_type: str,
    entity_id: str,
    from_state: str,
    to_state: str,
    before_obj: Any = None,
    after_obj: Any = None,
) -> None:
    """
    Check a state change against the registered workflow without recording it.

    Raises TransitionError when the entity type is unknown, the move is
    not registered, or a guard reports missing requirements.
    """
    workflow = WORKFLOWS.get(entity_type)
    if not workflow:
        raise TransitionError(
            code="invalid_transition",
            detail=[{"field": "entity_type", "reason": f"No workflow registered for {entity_type}"}],
        )

    transitions = workflow.get("transitions", {})
    allowed = transitions.get(from_state, {})
    guards = allowed.get(to_state)

    if guards is None:
        raise TransitionError(
            code="invalid_transition",
            detail=[{"field": "status", "reason": f"Cannot transition from {from_state} to {to_state}"}],
        )

    failures: List[Dict[str, str]] = []
    for guard in guards:
        failures.extend(
            guard(
                before_obj=before_obj,
                after_obj=after_obj,
                from_state=from_state,
                to_state=to_state,
            )
        )

    if failures:
        raise TransitionError(code="missing_requirements", detail=failures)


def apply_transition(
    *,
    actor_user_id: Optional[str],
    entity_type: str,
    entity_id: str,
    from_state: str,
    to_state: str,
    before_obj: Any = None,
    after_obj: Any = None,
) -> None:
    """Check a state change and log it as accepted."""
    check_transition(
        actor_user_id=actor_user_id,
        entity_type=entity_type,
        entity_id=entity_id,
        from_state=from_state,
        to_state=to_state,
        before_obj=before_obj,
        after_obj=after_obj,
    )
    logger.info(
        "Workflow transition allowed",
        extra={
            "workflow": entity_type,
            "entity_id": entity_id,
            "from_state": from_state,
            "to_state": to_state,
            "actor_user_id": actor_user_id,
        },
    )
