"""Error types raised by the preprocessing pipeline and the recognition workflow."""


class PreprocessingError(Exception):
    """A preprocessing stage rejected its input.

    ``stage`` names the failing step (``decode``, ``buffer``, ``grayscale``,
    ``contrast``, ``sharpen``, ``threshold`` or ``binarize``)
    so callers can tell the user where the run stopped.
    """

    kind = "preprocessing_error"

    def __init__(self, stage: str, detail: str) -> None:
        super().__init__(f"[{stage}] {detail}")
        self.stage = stage
        self.detail = detail


class InvalidDimensions(PreprocessingError):
    kind = "invalid_dimensions"


class InvalidConfig(PreprocessingError):
    kind = "invalid_config"


class DecodeFailure(PreprocessingError):
    kind = "decode_failure"


class RecognitionError(RuntimeError):
    """The OCR engine failed to produce a result."""
