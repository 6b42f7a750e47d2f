"""
Accounts module.

Personnel records, roles and username based session selection.
"""
