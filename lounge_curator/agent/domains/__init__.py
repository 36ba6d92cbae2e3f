"""Agent domain modules for Lounge Curator.

This module contains domain-specific tools:
- collector: External feed collection (RSS/Atom)
- processor: Oracle calls (relevancy scoring, digest curation, funding search)
"""

__all__: list[str] = []
