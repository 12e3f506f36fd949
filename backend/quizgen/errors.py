"""
Error taxonomy. Only InsufficientContentError (and an invalid question count) escape generate();
remote backend errors are recovered locally. Messages are user-facing.
"""


class QuizGenError(Exception):
    """Base for all quizgen errors."""


class InsufficientContentError(QuizGenError, ValueError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Document is too short or could not be processed. Please upload a document with more content."
        )


class InvalidQuestionCountError(QuizGenError, ValueError):
    pass


class GenerationFailure(QuizGenError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Could not generate questions from this document. Please try a different document with more substantial content."
        )


class RemoteBackendError(QuizGenError):
    """Network, timeout or parse failure on a remote provider. Never surfaced by generate()."""


class UnsupportedDocumentError(QuizGenError):
    pass


class DocumentReadError(QuizGenError):
    pass


# Quiz session


class SessionStateError(QuizGenError):
    """Operation not valid in the current quiz state."""


class GenerationInProgressError(SessionStateError):
    def __init__(self) -> None:
        super().__init__("A document is already being processed. Wait for it to finish.")


class AnswerAlreadyRecordedError(SessionStateError):
    pass


class FeedbackNotReadyError(SessionStateError):
    pass


class InvalidAnswerError(QuizGenError, ValueError):
    pass
