"""
Domain layer: dtypes, error kinds, the array protocol and pure shape arithmetic.

Nothing in this package depends on a numerical backend.
"""
