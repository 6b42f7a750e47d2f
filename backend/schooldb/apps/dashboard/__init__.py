"""
Dashboard module.

Read-only stock and requisition figures for every role.
"""
