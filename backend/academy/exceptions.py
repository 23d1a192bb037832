"""Domain errors raised by services and mapped to HTTP responses in main.py."""

from uuid import UUID


class DomainError(Exception):
    """Base class for errors the API reports to clients."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ResourceNotFoundError(DomainError):
    """A lesson, exercise or profile the request refers to does not exist."""

    def __init__(self, resource_type: str, resource_id: UUID | str) -> None:
        self.resource_type = resource_type
        self.resource_id = str(resource_id)
        super().__init__(f"{resource_type} with ID {self.resource_id} not found")


class ValidationError(DomainError):
    """A business rule rejected otherwise well-formed input."""


class QuizNotPassedError(ValidationError):
    """Raised when a lesson is marked complete before its quiz was passed."""

    def __init__(self, lesson_id: UUID | str, passing_percent: int = 80) -> None:
        self.lesson_id = str(lesson_id)
        self.passing_percent = passing_percent
        super().__init__(f"Pass the quiz with at least {passing_percent}% before completing this lesson.")
