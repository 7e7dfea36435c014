"""Exception classes for the DyeProfile core module."""


class DyeProfileError(Exception):
    """Base exception for all dye-profile errors."""


class ConfigError(DyeProfileError):
    """Raised when a run configuration is invalid."""


class ReplicateCountError(DyeProfileError):
    """Raised when a condition code does not have the expected replicate files."""

    def __init__(self, code: int, count: int, expected: int = 3) -> None:
        super().__init__(
            f"RPM {code} does not have exactly {expected} replicates "
            f"(found {count})"
        )
        self.code = code
        self.count = count
        self.expected = expected


class OutputDirectoryError(DyeProfileError):
    """Raised when the output directory cannot be created."""

    def __init__(self, path: str | None = None, reason: str | None = None) -> None:
        msg = f"Cannot create output directory: {path}" if path else "Cannot create output directory"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
        self.path = path
        self.reason = reason


class ImageFormatError(DyeProfileError):
    """Raised when an image cannot be read as a multi-channel colour image."""

    def __init__(self, path: str | None = None, reason: str | None = None) -> None:
        msg = f"Unsupported image: {path}" if path else "Unsupported image"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
        self.path = path
        self.reason = reason
