"""
Boundary layer.

Adapters to external collaborators: language model gateway, vector index,
and relational persistence.
"""
