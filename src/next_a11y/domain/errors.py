"""Domain exceptions for next-a11y."""


class A11yError(Exception):
    """Base class for every error the CLI reports as fatal."""


class ConfigError(A11yError):
    """Invalid configuration value (unknown rule level, malformed file)."""


class ScanPathError(A11yError):
    """The requested scan path does not exist."""

    def __init__(self, path: str, reason: str = "path does not exist") -> None:
        super().__init__(f"Cannot scan {path}: {reason}")
        self.path = path
        self.reason = reason


class FixWriteError(A11yError):
    """Writing a fixed source file back to disk failed."""

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"Failed to write fixes to {path}: {cause}")
        self.path = path
        self.cause = cause


class ProviderConfigurationError(A11yError):
    """AI resolution was requested but no generation provider is usable."""


class GenerationError(A11yError):
    """The text-generation backend failed after all retries."""

    def __init__(self, message: str, attempts: int = 1) -> None:
        super().__init__(message)
        self.attempts = attempts
