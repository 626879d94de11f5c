"""Exceptions that abort a load run."""


class LoaderError(Exception):
    """Base class for errors that are fatal to a pipeline run."""


class ResourceReadError(LoaderError):
    """A source resource could not be opened or read."""

    def __init__(self, location: str, reason: object):
        self.location = location
        self.reason = reason
        super().__init__(f"Cannot read {location}: {reason}")


class FormatError(LoaderError):
    """A field could not be parsed into the type its column requires."""

    def __init__(
        self,
        message: str,
        value: str | None = None,
        source: str | None = None,
        line: int | None = None,
    ):
        self.message = message
        self.value = value
        self.source = source
        self.line = line
        where = f"{source}:{line}: " if source and line else ""
        super().__init__(f"{where}{message}")

    def at(self, source: str, line: int) -> "FormatError":
        """Return a copy of this error annotated with where the bad field was read."""
        return FormatError(self.message, self.value, source, line)


class PhaseOrderError(ValueError):
    """The load phases were scheduled in an order that breaks their dependencies."""
