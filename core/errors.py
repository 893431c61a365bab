"""
HSK Study – Error types
========================
Exceptions shared by the loader, the study session and the speech service.
"""


class DataLoadFailure(Exception):
    """A required vocabulary file could not be read or parsed."""


class SentenceDataUnavailable(Exception):
    """The optional sentence file is missing or malformed."""


class SpeechUnsupported(Exception):
    """Text-to-speech cannot run in this environment."""


class InvalidTransition(RuntimeError):
    """An action was issued in a mode that has no such transition."""

    def __init__(self, action: str, mode) -> None:
        super().__init__(f"Cannot {action} while in {mode.value} mode")
        self.action = action
        self.mode = mode
