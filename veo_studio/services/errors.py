from typing import Optional


class VideoGenerationError(RuntimeError):
    """Base class for failures shown to the user as a single message."""


class MissingCredentialError(VideoGenerationError):
    def __init__(self, message: str = "Please enter your Google API Key.") -> None:
        super().__init__(message)


class MissingPromptError(VideoGenerationError):
    def __init__(self, message: str = "Please enter a prompt.") -> None:
        super().__init__(message)


class MalformedPromptError(VideoGenerationError):
    def __init__(
        self,
        message: str = "Malformed JSON in the prompt field. Please correct it or use plain text.",
    ) -> None:
        super().__init__(message)


class MissingVideoUriError(VideoGenerationError):
    def __init__(self, message: str = "Video generation completed, but no video URI was found.") -> None:
        super().__init__(message)


class OperationFailedError(VideoGenerationError):
    pass


class AssetFetchError(VideoGenerationError):
    def __init__(self, status_code: int, reason: Optional[str] = None) -> None:
        self.status_code = status_code
        super().__init__(f"Failed to fetch video: {reason or status_code}")


class PollTimeoutError(VideoGenerationError):
    pass


class JobAlreadyRunningError(VideoGenerationError):
    def __init__(self, message: str = "A video is already being generated. Please wait for it to finish.") -> None:
        super().__init__(message)


class InvalidImageError(VideoGenerationError):
    pass
