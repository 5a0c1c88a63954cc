"""Error types for trainer and session operations.

Raised by the services; the API layer translates them into HTTP responses.
"""


class TrainerError(Exception):
    """Base class for expected, caller-facing trainer errors."""


class OnboardingMissingError(TrainerError):
    """Raised when plan generation is requested before onboarding is saved."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("Onboarding data missing")


class SessionNotFoundError(TrainerError):
    """Raised when a session does not exist or belongs to another user."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__("Session not found")
