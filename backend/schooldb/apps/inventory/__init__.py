"""
Inventory module.

Stock items, reorder thresholds and low-stock reporting.
"""
