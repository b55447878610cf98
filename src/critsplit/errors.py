"""Error types raised by critsplit."""


class StylesheetError(Exception):
    """Raised when CSS source cannot be parsed into a stylesheet tree."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class ConfigError(ValueError):
    """Raised for invalid splitter configuration."""
