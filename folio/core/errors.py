# folio/core/errors.py


class FolioError(Exception):
    """Base class for errors surfaced to visitors as a message."""

    status_code = 500

    def user_message(self) -> str:
        return f"Error: {self}. Please try again."


class ConfigurationError(FolioError):
    pass


class ContentNotLoadedError(FolioError):
    status_code = 503

    def __init__(self, message: str = "CV content not loaded. Please ensure EN-CV-Alodwan.pdf is accessible."):
        super().__init__(message)


class SearchServiceError(FolioError):
    status_code = 502


class UnexpectedResponseError(FolioError):
    status_code = 502

    def __init__(self, message: str = "Unexpected response format from API"):
        super().__init__(message)
