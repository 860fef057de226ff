"""
Engine Exceptions

All errors raised by the engine derive from EngineError so callers can
tell engine faults apart from bugs in their own code.

Hierarchy:
    EngineError
    ├── EmptyMoveListError   strategy invoked with no candidate moves
    ├── SearchError          evaluation or search could not complete
    ├── RulesAuthorityError  rules backend rejected a move it listed as legal
    └── WorkerBusyError      move requested while another is outstanding
"""


class EngineError(Exception):
    """Base class for engine errors."""


class EmptyMoveListError(EngineError, ValueError):
    """A selection helper was called with an empty move list."""

    def __init__(self, message: str = "No candidate moves to select from"):
        super().__init__(message)


class SearchError(EngineError):
    """Evaluation or search failed on an unexpected position shape."""


class RulesAuthorityError(EngineError):
    """
    The rules backend refused to apply a move taken from its own legal list.

    This means move generation and move application disagree. It is not
    recoverable by picking another move and is never swallowed.
    """


class WorkerBusyError(EngineError, RuntimeError):
    """A new move request was made while one is still outstanding."""
