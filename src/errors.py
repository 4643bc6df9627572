from typing import Optional


class SlideAnalyzerError(Exception):
    """Base class for slide analyzer failures."""


# Credential does not carry the expected "sk-" prefix
class InvalidCredentialFormat(SlideAnalyzerError):
    def __init__(self, message: str = 'Invalid API key format. OpenAI API keys should start with "sk-"'):
        super().__init__(message)


# Non-success answer from the completion or model-listing endpoint
class UpstreamError(SlideAnalyzerError):
    def __init__(self, status: Optional[int], message: str):
        self.status = status
        self.message = message
        if status is None:
            super().__init__(f"OpenAI API error: {message}")
        else:
            super().__init__(f"OpenAI API error ({status}): {message}")


class UnsupportedFileType(SlideAnalyzerError):
    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"Unsupported file type: {file_name}")


# Assistant content is not a JSON object; recovered by the line decoder
class MalformedResponse(SlideAnalyzerError):
    pass


# No returned term matched the allowed set; recovered by defaulting
class EmptyOrInvalidTaxonomy(SlideAnalyzerError):
    pass
