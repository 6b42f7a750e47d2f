from __future__ import annotations

from datetime import date

import pytest

from schooldb.apps.inventory import services as inventory_services
from schooldb.apps.requisitions import schemas as requisition_schemas
from schooldb.apps.requisitions import services as requisition_services
from schooldb.apps.storage import services as storage_services
from schooldb.apps.workflow import TransitionError
from schooldb.errors import InsufficientStock, NotFound

Status = requisition_schemas.RequisitionStatus


def _create(db, lines, reason="Science fair"):
    payload = requisition_schemas.RequisitionCreate(
        requester_id="u2",
        requester_name="Somsri Rakrian",
        department="Thai Language Department",
        reason=reason,
        items=[
            requisition_schemas.RequisitionLine(item_id=item_id, item_name=item_id, request_qty=qty)
            for item_id, qty in lines
        ],
    )
    requisition = requisition_services.create_requisition(db, payload)
    db.commit()
    return requisition


def _quantities(db):
    return {item.id: item.quantity for item in inventory_services.list_items(db)}


def test_new_requisition_is_pending_and_first(db_session):
    requisition = _create(db_session, [("i3", 2)])

    assert requisition.status == Status.PENDING
    assert requisition.request_date == date.today()
    assert requisition.approve_date is None
    assert requisition_services.list_requisitions(db_session)[0].id == requisition.id


def test_ids_continue_after_seed_numbering(db_session):
    first = _create(db_session, [("i1", 1)])
    second = _create(db_session, [("i1", 1)])
    assert first.id == "R-2566-003"
    assert second.id == "R-2566-004"


def test_ids_are_not_reused_after_records_disappear(db_session):
    created = _create(db_session, [("i1", 1)])
    storage_services.save_collection(db_session, storage_services.REQUISITIONS_KEY, [])
    db_session.commit()

    again = _create(db_session, [("i1", 1)])
    assert created.id == "R-2566-003"
    assert again.id == "R-2566-004"


def test_approval_within_stock_deducts(db_session):
    requisition = _create(db_session, [("i3", 2)])

    approved = requisition_services.transition_requisition(db_session, requisition.id, Status.APPROVED, "ok")
    db_session.commit()

    assert _quantities(db_session)["i3"] == 3
    stored = requisition_services.get_requisition(db_session, requisition.id)
    assert stored.status == Status.APPROVED
    assert stored.approve_date == date.today()
    assert stored.approver_note == "ok"
    assert approved == stored


def test_approval_beyond_stock_raises_and_changes_nothing(db_session):
    requisition = _create(db_session, [("i3", 10)])
    before = _quantities(db_session)

    with pytest.raises(InsufficientStock) as excinfo:
        requisition_services.transition_requisition(db_session, requisition.id, Status.APPROVED)

    assert excinfo.value.shortfalls == [
        {"item_id": "i3", "item_name": "i3", "requested": 10, "available": 5}
    ]
    assert _quantities(db_session) == before
    assert requisition_services.get_requisition(db_session, requisition.id).status == Status.PENDING


def test_approval_is_all_or_nothing_across_lines(db_session):
    # First line fits, second does not: neither may be deducted.
    requisition = _create(db_session, [("i1", 2), ("i3", 6)])
    before = _quantities(db_session)

    with pytest.raises(InsufficientStock) as excinfo:
        requisition_services.transition_requisition(db_session, requisition.id, Status.APPROVED)

    assert [s["item_id"] for s in excinfo.value.shortfalls] == ["i3"]
    assert _quantities(db_session) == before


def test_approval_fails_when_item_was_deleted(db_session):
    requisition = _create(db_session, [("i4", 1)])
    inventory_services.remove_item(db_session, "i4")
    db_session.commit()

    with pytest.raises(InsufficientStock) as excinfo:
        requisition_services.transition_requisition(db_session, requisition.id, Status.APPROVED)
    assert excinfo.value.shortfalls[0]["available"] is None


def test_repeated_item_lines_are_summed_before_checking(db_session):
    requisition = _create(db_session, [("i3", 3), ("i3", 3)])
    with pytest.raises(InsufficientStock):
        requisition_services.transition_requisition(db_session, requisition.id, Status.APPROVED)
    assert _quantities(db_session)["i3"] == 5


def test_quantities_never_go_negative_over_a_sequence_of_approvals(db_session):
    first = _create(db_session, [("i3", 3)])
    second = _create(db_session, [("i3", 3)])

    requisition_services.transition_requisition(db_session, first.id, Status.APPROVED)
    db_session.commit()
    with pytest.raises(InsufficientStock):
        requisition_services.transition_requisition(db_session, second.id, Status.APPROVED)

    assert _quantities(db_session)["i3"] == 2
    assert all(q >= 0 for q in _quantities(db_session).values())


def test_reject_leaves_stock_untouched(db_session):
    before = _quantities(db_session)

    rejected = requisition_services.transition_requisition(
        db_session, "R-2566-002", Status.REJECTED, "Budget closed"
    )
    db_session.commit()

    assert rejected.status == Status.REJECTED
    assert rejected.approve_date is None
    assert rejected.approver_note == "Budget closed"
    assert _quantities(db_session) == before


def test_reject_requires_a_note(db_session):
    with pytest.raises(TransitionError) as excinfo:
        requisition_services.transition_requisition(db_session, "R-2566-002", Status.REJECTED, "  ")
    assert excinfo.value.code == "missing_requirements"


def test_decided_requisitions_cannot_be_transitioned_again(db_session):
    requisition_services.transition_requisition(db_session, "R-2566-002", Status.APPROVED)
    db_session.commit()
    stock_after_approval = _quantities(db_session)

    for target, note in ((Status.REJECTED, "changed mind"), (Status.APPROVED, None)):
        with pytest.raises(TransitionError) as excinfo:
            requisition_services.transition_requisition(db_session, "R-2566-002", target, note)
        assert excinfo.value.code == "invalid_transition"

    assert _quantities(db_session) == stock_after_approval


def test_completed_is_not_a_reachable_target(db_session):
    with pytest.raises(TransitionError):
        requisition_services.transition_requisition(db_session, "R-2566-002", Status.COMPLETED)


def test_transition_unknown_requisition_raises_not_found(db_session):
    with pytest.raises(NotFound):
        requisition_services.transition_requisition(db_session, "R-2566-999", Status.APPROVED)


def test_requester_history_and_approval_tabs(db_session):
    _create(db_session, [("i2", 1)])
    assert len(requisition_services.list_for_requester(db_session, "u2")) == 3
    assert requisition_services.list_for_requester(db_session, "u1") == []
    assert {r.id for r in requisition_services.list_pending(db_session)} == {"R-2566-003", "R-2566-002"}
    assert [r.id for r in requisition_services.list_decided(db_session)] == ["R-2566-001"]


def test_saved_requisitions_round_trip(session_factory):
    writer = session_factory()
    created = _create(writer, [("i5", 4)], reason="Art class")
    writer.close()

    reader = session_factory()
    assert requisition_services.get_requisition(reader, created.id) == created
    reader.close()


def test_invalid_stored_record_does_not_wipe_the_rest(db_session):
    good = {
        "id": "R-2566-050",
        "requesterId": "u2",
        "requesterName": "Somsri Rakrian",
        "department": "Thai Language Department",
        "requestDate": "2024-01-10",
        "reason": "Science fair",
        "status": "PENDING",
        "items": [{"itemId": "i1", "itemName": "A4 Paper", "requestQty": 3}],
    }
    bad = dict(good, id="R-2566-049", items=[{"itemId": "i1", "itemName": "A4 Paper", "requestQty": 0}])
    storage_services.save_collection(db_session, storage_services.REQUISITIONS_KEY, [bad, good])
    db_session.commit()

    created = _create(db_session, [("i3", 1)])

    assert created.id == "R-2566-051"
    assert [r.id for r in requisition_services.list_requisitions(db_session)] == ["R-2566-051", "R-2566-050"]


def test_refused_approval_is_not_logged_as_allowed(db_session, caplog):
    requisition = _create(db_session, [("i3", 6)])

    with caplog.at_level("INFO"):
        with pytest.raises(InsufficientStock):
            requisition_services.transition_requisition(db_session, requisition.id, Status.APPROVED)

    assert "Approval refused, insufficient stock" in caplog.text
    assert "Workflow transition allowed" not in caplog.text


def test_successful_approval_logs_allowed_transition(db_session, caplog):
    with caplog.at_level("INFO"):
        requisition_services.transition_requisition(db_session, "R-2566-002", Status.APPROVED)

    assert "Workflow transition allowed" in caplog.text
