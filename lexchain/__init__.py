"""
lexchain - legal document to smart contract conversion pipeline.

This package contains the conversion core shared by every entry point:
- Term extraction (pattern rules and LLM-assisted with fallback)
- Solidity generation from a fixed template
- Compilation and network deployment
- Persistence of conversion state

Entry points (HTTP handlers, workers, scripts) import from this package
rather than duplicating pipeline logic.
"""

__version__ = "0.1.0"
