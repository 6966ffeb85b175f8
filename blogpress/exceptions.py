class BlogpressError(Exception):
    """Base class for errors raised while turning a note into HTML."""

    pass


class DiagramRenderError(BlogpressError):
    """A diagram tool exited abnormally or produced no image."""

    def __init__(self, language: str, message: str) -> None:
        super().__init__(f"{language}: {message}")
        self.language = language
        self.message = message


class UploadError(BlogpressError):
    """The image host rejected or failed to store an upload."""

    pass


class MarkdownConversionError(BlogpressError):
    """The markdown engine failed. There is no sensible partial output."""

    pass


class HandledBuildError(BlogpressError):
    """An error that has already been properly displayed to the user.
    Parent processes should exit gracefully without showing a traceback."""

    pass
