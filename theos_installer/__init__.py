"""Theos installer (sequential, idempotent bootstrapper).

Core design goals:
- Idempotent steps, re-derived from the filesystem on every run
- Fail fast: the first failing step ends the run with its own exit code
- No persisted state beyond the installed tree itself
- Centralized logging
"""

__all__ = []
