"""
Storage module.

Keyed JSON namespaces holding the users, items and requisitions
collections, plus the seed set used when nothing has been stored yet.
"""

from . import models  # noqa: F401
