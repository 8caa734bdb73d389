class StoryAssemblyError(Exception):
    """Base class for every error raised by the story assembly package."""


class FormatError(StoryAssemblyError, ValueError):
    """A serialized story (or one of its parts) does not have the expected shape."""


class ResponseFormatError(FormatError):
    """A generation response is missing the candidates/content/parts envelope."""


class ImageDecodeError(StoryAssemblyError, ValueError):
    """A single inline image payload is not valid base64 or not a decodable image."""


class UnsupportedLanguageError(StoryAssemblyError, ValueError):
    """No language profile is registered under the requested name."""
