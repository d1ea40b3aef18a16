"""
Domain exceptions raised by the recommendation pipeline.
"""

PARSE_FAILURE_MESSAGE = "Failed to parse JSON data after retrying investments"
UNEXPECTED_FAILURE_MESSAGE = "Unexpected error occurred during processing investments"


class RecommendationFailedError(Exception):
    """Terminal failure: no attempt produced a valid recommendation.

    ``message`` is safe to return to the client as-is.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SkillInvocationError(RuntimeError):
    """A skill in the chain failed, aborting the remaining skills."""

    def __init__(self, skill_name: str, cause: Exception) -> None:
        super().__init__(f"Skill {skill_name!r} failed: {cause}")
        self.skill_name = skill_name
        self.cause = cause
