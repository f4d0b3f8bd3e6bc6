"""
Pipeline error taxonomy.

Every failure that leaves the conversion pipeline is a PipelineError. The
HTTP layer turns it into ``{"success": false, "error": true, "detail": ...}``
using the status code carried by the subclass.
"""


class PipelineError(Exception):
    """Base error carrying an HTTP status classification and a detail string."""

    status_code: int = 500

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, detail={self.detail!r})"


class InputError(PipelineError):
    """Malformed source URL or request parameters."""

    status_code = 400


class NotFoundError(PipelineError):
    """The page has no slides, or none at the requested resolution."""

    status_code = 404


class UpstreamError(PipelineError):
    """Presentation page or slide image could not be retrieved."""

    status_code = 500


class ParseError(PipelineError):
    """Presentation page could not be parsed."""

    status_code = 500


class ExportError(PipelineError):
    """Building the PDF, PPTX or ZIP artifact failed."""

    status_code = 500


class PublishError(PipelineError):
    """Uploading the artifact to the remote store failed."""

    status_code = 500
