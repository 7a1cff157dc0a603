"""Error types for Bloggo.

Every failure the pipeline can produce is a subclass of BloggoError, so the
CLI boundary can catch one type, print its display text and exit nonzero.

Key classes:
- FileSystemError: Wraps an OSError raised while reading or writing files.
- TemplateError: A template could not be found or parsed.
- RenderError: A template failed while rendering.
- UnexpectedEOFError: A document ended before its front matter did.
- DeserializationError: The YAML front matter could not be decoded.
- MissingFrontMatterError, NotAMappingError, UnrepresentableNumberError,
  PathError: Domain invariant violations.
"""

from __future__ import annotations

from pathlib import Path


class BloggoError(Exception):
    """Base class for all Bloggo errors.

    Attributes:
        message: Human-readable error message.
        source_path: Path to the source file involved, when known.
    """

    def __init__(self, message: str, source_path: Path | None = None):
        self.message = message
        self.source_path = source_path
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class FileSystemError(BloggoError):
    """An underlying OSError, with its message as display text."""

    def __init__(self, original_error: OSError, source_path: Path | None = None):
        self.original_error = original_error
        if source_path is None and original_error.filename is not None:
            source_path = Path(original_error.filename)
        super().__init__(str(original_error), source_path)


class TemplateError(BloggoError):
    """A template is missing or has a syntax error."""


class RenderError(BloggoError):
    """A template raised while being rendered."""


class UnexpectedEOFError(BloggoError):
    """The stream ended while the front matter was still being read."""

    def __init__(self, source: str | Path):
        self.source = str(source)
        super().__init__(f"Unexpected end of file: {self.source}", Path(self.source))


class DeserializationError(BloggoError):
    """The front matter block is not valid YAML."""

    def __init__(self, detail: str, source_path: Path | None = None):
        self.detail = detail
        super().__init__(f"YAML deserialization failure: {detail}", source_path)


class MissingFrontMatterError(BloggoError):
    """The document does not start with a front matter delimiter."""

    def __init__(self, source_path: Path | None = None):
        super().__init__("Missing front matter.", source_path)


class NotAMappingError(BloggoError):
    """The front matter decoded to something other than a mapping."""

    def __init__(self, source_path: Path | None = None):
        super().__init__("Parsed YAML is not a mapping.", source_path)


class UnrepresentableNumberError(BloggoError):
    """A number fits neither a 64-bit integer nor a double."""

    def __init__(self, literal: str):
        self.literal = literal
        super().__init__(f"Unknown number format while parsing YAML: {literal}")


class PathError(BloggoError):
    """A path does not lie under the directory it is expected to."""
