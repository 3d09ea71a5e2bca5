"""Error codes and error handling utilities for DashTheme."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for theme operations."""

    # File system errors
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()
    PATH_INVALID = auto()

    # Theme errors
    THEME_NOT_FOUND = auto()
    THEME_INVALID = auto()
    THEME_APPLY_FAILED = auto()
    THEME_FALLBACK = auto()

    # Operation errors
    OPERATION_FAILED = auto()

    # Configuration errors
    CONFIG_INVALID = auto()
    CONFIG_PERMISSION_DENIED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.FILE_NOT_FOUND: "The file was not found. It may have been moved or deleted.",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check file permissions or if the file is read-only.",
    ErrorCode.PATH_INVALID: "The specified path is invalid or inaccessible.",

    ErrorCode.THEME_NOT_FOUND: "The theme is not installed. Reload themes or pick another one.",
    ErrorCode.THEME_INVALID: "The theme package is invalid. Check its manifest.json and theme.json.",
    ErrorCode.THEME_APPLY_FAILED: "The theme could not be applied. The previous theme is still active.",
    ErrorCode.THEME_FALLBACK: "No valid theme package found; reverted to the built-in palette.",

    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",

    ErrorCode.CONFIG_INVALID: "Configuration is invalid. Reset to defaults?",
    ErrorCode.CONFIG_PERMISSION_DENIED: "Cannot save configuration. Check folder permissions.",
}


@dataclass
class DashThemeError(Exception):
    """Base exception for DashTheme with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"\nFile: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


def classify_exception(
    exc: Exception,
    path: Path | None = None,
    default_code: ErrorCode = ErrorCode.OPERATION_FAILED,
) -> DashThemeError:
    """Classify a generic exception into a DashThemeError with appropriate code.

    Exceptions with no specific mapping get *default_code*.
    """
    if isinstance(exc, DashThemeError):
        return exc
    exc_name = type(exc).__name__
    exc_str = str(exc)

    if "ThemeValidationError" in exc_name:
        return DashThemeError(
            ErrorCode.THEME_INVALID,
            message=f"Invalid theme: {exc_str}",
            path=path,
            details={"original": exc_str},
        )
    if isinstance(exc, FileNotFoundError):
        return DashThemeError(ErrorCode.FILE_NOT_FOUND, path=path, details={"original": exc_str})
    if isinstance(exc, PermissionError):
        return DashThemeError(ErrorCode.FILE_ACCESS_DENIED, path=path, details={"original": exc_str})
    if isinstance(exc, (NotADirectoryError, IsADirectoryError)):
        return DashThemeError(ErrorCode.PATH_INVALID, path=path, details={"original": exc_str})

    return DashThemeError(
        default_code,
        message=f"{exc_name}: {exc}",
        path=path,
        details={"original": exc_str},
    )


def format_error_for_user(error: DashThemeError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, DashThemeError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n\n{error.suggestion}")
        if error.path:
            parts.append(f"\n\nFile: {error.path.name}")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
