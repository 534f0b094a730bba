"""
vaultmind: retrieval-augmented chat and hierarchical summaries over
document vaults.
"""

__version__ = "0.1.0"
