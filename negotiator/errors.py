"""Error taxonomy shared by the core components and the HTTP layer."""

from __future__ import annotations


class NegotiatorError(Exception):
    """Base class for all application errors."""


class ValidationError(NegotiatorError):
    """Malformed or incomplete input (e.g. fewer than 3 achievements)."""


class NotFound(NegotiatorError):
    """Pack or session does not exist, or is not owned by the caller."""


class GenerationUnavailable(NegotiatorError):
    """The language-model call failed. Always recovered by a fallback."""


class PersistenceError(NegotiatorError):
    """A pack or session store write failed."""


class SessionConflict(PersistenceError):
    """The session changed since the caller last read it."""

    def __init__(self, session_id: str, expected: int, actual: int) -> None:
        super().__init__(
            f"Session {session_id} is at version {actual}, expected {expected}"
        )
        self.session_id = session_id
        self.expected = expected
        self.actual = actual


class AuthenticationError(NegotiatorError):
    """Bearer credential missing or rejected by the identity provider."""
