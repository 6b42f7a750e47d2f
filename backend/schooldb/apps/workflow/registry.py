from __future__ import annotations

from .guards import guard_rejection_note

# from_state -> {to_state: [guards]}. An empty mapping marks a terminal state.
WORKFLOWS = {
    "requisition": {
        "transitions": {
            "PENDING": {
                "APPROVED": [],
                "REJECTED": [guard_rejection_note],
            },
            "APPROVED": {},
            "REJECTED": {},
            # Recognised in stored data; nothing moves a requisition here.
            "COMPLETED": {},
        }
    },
}
