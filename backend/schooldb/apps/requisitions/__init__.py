"""
Requisitions module.

Staff withdrawal requests against stock and the approval workflow that
deducts stock.
"""
