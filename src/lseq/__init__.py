"""
lseq - Dense, coordination-free identifiers for replicated sequences.

Generates identifiers that sort strictly between two neighbors, for use
as element positions in a sequence CRDT.
"""

__version__ = "0.1.0"

# Re-export the core API for convenience
from lseq.core import DoubleBase, Ident, LSEQGenerator, Strategy, new_generator

__all__ = ["DoubleBase", "Ident", "LSEQGenerator", "Strategy", "new_generator", "__version__"]
