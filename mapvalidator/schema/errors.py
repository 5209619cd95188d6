"""Errors raised while reading map, requirements and parameters files.

Both kinds stop a run before any validator executes; the CLI reports them with
``describe`` and exits with status 2.
"""


class InputError(Exception):
    """Base class for problems with an input document."""

    heading = "Input error"

    def describe(self) -> list[str]:
        """Render the error as the lines printed to stderr."""
        return [f"{self.heading}: {self}"]


class SchemaLoadError(InputError):
    """Raised when a file is missing, unreadable or not valid YAML/JSON."""

    heading = "Error loading file"

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SchemaValidationError(InputError):
    """Raised when a document parses but its content is rejected.

    ``errors`` holds one ``{"loc", "msg", "type"}`` dict per problem, either
    flattened from pydantic or collected by the map builder for dangling and
    duplicate ids.
    """

    heading = "Schema validation error"

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)

    def describe(self) -> list[str]:
        return super().describe() + [
            f"  - {err['loc']}: {err['msg']}" for err in self.errors
        ]
