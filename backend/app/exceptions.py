"""Domain exceptions raised by the progress and grading logic.

Route handlers let these propagate; ``app.main`` turns them into JSON
responses with the ``{"code", "message"}`` body used across the API.
"""


class LearningError(Exception):
    """Base class for all domain errors."""

    code = "learning_error"
    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class NotFoundError(LearningError):
    """A referenced course, lesson, quiz or question does not exist."""

    code = "not_found"
    status_code = 404

    def __init__(self, resource_type: str, resource_id) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} with ID {resource_id} not found")


class QuizRequiredError(LearningError):
    """Direct completion attempted on a lesson that is gated by a quiz."""

    code = "quiz_required"
    status_code = 400

    def __init__(self, lesson_id: int) -> None:
        self.lesson_id = lesson_id
        super().__init__(
            "Cannot complete lesson with quiz without passing the quiz"
        )


class MalformedQuizError(LearningError):
    code = "quiz_malformed"
    status_code = 400


class ConflictError(LearningError):
    code = "conflict"
    status_code = 409


class OrderIndexConflictError(ConflictError):
    """Two lessons (or questions) would share a position in the same parent."""

    code = "order_index_conflict"

    def __init__(self, parent: str, parent_id: int, order_index: int) -> None:
        self.order_index = order_index
        super().__init__(
            f"order_index {order_index} is already used in {parent} {parent_id}"
        )


class ForbiddenError(LearningError):
    code = "forbidden"
    status_code = 403


class CatalogLockedError(ForbiddenError):
    """The user still has mandatory courses to finish."""

    code = "mandatory_training_required"

    def __init__(self, remaining: int) -> None:
        self.remaining = remaining
        super().__init__(
            f"Complete {remaining} more mandatory course(s) to open the catalog"
        )


class PersistenceError(LearningError):
    """The database failed a read or write; nothing was committed."""

    code = "persistence_error"
    status_code = 500
