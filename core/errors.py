"""Error types raised while turning model output into quiz questions."""


class QuizContentError(ValueError):
    """Base class for failures inside the extraction/validation stages."""


class EmptyOrNonTextError(QuizContentError):
    def __init__(self, message: str = "Content is empty or not a string"):
        super().__init__(message)


class ExtractionExhaustedError(QuizContentError):
    """Nothing JSON-like could be located anywhere in the raw text."""

    def __init__(self, message: str = "No JSON object or array found in content"):
        super().__init__(message)


class ParseFailureError(QuizContentError):
    pass


class ShapeError(QuizContentError):
    pass


class FieldValidationError(QuizContentError):
    """A single field of a single question failed validation."""

    def __init__(self, message: str, *, index: int, field: str):
        super().__init__(message)
        self.index = index
        self.field = field


class InvalidGeneratedContentError(ValueError):
    """The only error type that leaves `validate_generated_content`."""


class GeminiRequestError(RuntimeError):
    pass


class QuizGenerationError(RuntimeError):
    pass
