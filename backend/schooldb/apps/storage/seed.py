"""
Seed collections used whenever a namespace has never been written or its
stored payload cannot be read back.
"""

from __future__ import annotations

SEED_USERS = [
    {
        "id": "u1",
        "username": "admin",
        "fullname": "Somchai Jaidee (Admin)",
        "position": "Supplies Officer",
        "department": "General Office",
        "role": "ADMIN",
    },
    {
        "id": "u2",
        "username": "staff",
        "fullname": "Somsri Rakrian",
        "position": "Senior Teacher",
        "department": "Thai Language Department",
        "role": "STAFF",
    },
    {
        "id": "u3",
        "username": "director",
        "fullname": "Wisai Kwangklai",
        "position": "School Director",
        "department": "Administration",
        "role": "VIEWER",
    },
]

SEED_ITEMS = [
    {
        "id": "i1",
        "code": "OFF-001",
        "name": "A4 Paper Double A (80g)",
        "category": "Office Supplies",
        "unit": "ream",
        "quantity": 45,
        "minQuantity": 10,
        "location": "Cabinet 1, Shelf 2",
        "lastUpdated": "2023-10-01",
    },
    {
        "id": "i2",
        "code": "OFF-002",
        "name": "Whiteboard Marker (Blue)",
        "category": "Office Supplies",
        "unit": "pen",
        "quantity": 120,
        "minQuantity": 20,
        "location": "Cabinet 1, Shelf 1",
        "lastUpdated": "2023-10-05",
    },
    {
        "id": "i3",
        "code": "COM-001",
        "name": "Logitech Wireless Mouse",
        "category": "Computer Equipment",
        "unit": "piece",
        "quantity": 5,
        "minQuantity": 5,
        "location": "Server Room",
        "lastUpdated": "2023-09-20",
    },
    {
        "id": "i4",
        "code": "CL-001",
        "name": "Floor Cleaner 3.5 L",
        "category": "Housekeeping Supplies",
        "unit": "gallon",
        "quantity": 8,
        "minQuantity": 5,
        "location": "Housekeeping Room",
        "lastUpdated": "2023-10-10",
    },
    {
        "id": "i5",
        "code": "EDU-001",
        "name": "Single-sided Colour Paper",
        "category": "Teaching Materials",
        "unit": "pack",
        "quantity": 50,
        "minQuantity": 15,
        "location": "Cabinet 2, Shelf 3",
        "lastUpdated": "2023-10-02",
    },
]

# Newest first, the order the requisition list is kept in.
SEED_REQUISITIONS = [
    {
        "id": "R-2566-002",
        "requesterId": "u2",
        "requesterName": "Somsri Rakrian",
        "department": "Thai Language Department",
        "requestDate": "2023-10-20",
        "reason": "Exhibition board for Thai Language Day",
        "status": "PENDING",
        "items": [
            {"itemId": "i1", "itemName": "A4 Paper Double A (80g)", "requestQty": 2},
            {"itemId": "i5", "itemName": "Single-sided Colour Paper", "requestQty": 10},
        ],
    },
    {
        "id": "R-2566-001",
        "requesterId": "u2",
        "requesterName": "Somsri Rakrian",
        "department": "Thai Language Department",
        "requestDate": "2023-10-15",
        "reason": "Teaching materials for Grade 7",
        "status": "APPROVED",
        "items": [
            {"itemId": "i2", "itemName": "Whiteboard Marker (Blue)", "requestQty": 5},
        ],
        "approveDate": "2023-10-16",
    },
]
