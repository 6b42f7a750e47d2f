# backend/schooldb/__init__.py
"""
Import ORM models from each app so that Base.metadata.create_all() sees
every table.

Users, items and requisitions are not tables of their own: each is a JSON
collection stored under one key of `storage_blobs`.
"""

from .apps.storage import models as storage_models            # key/value namespaces

__all__ = [
    "storage_models",
]
