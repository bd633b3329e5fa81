# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared CLI primitives."""

from __future__ import annotations

from typing import Final

EXIT_OK: Final[int] = 0
EXIT_FAILURE: Final[int] = 1
EXIT_RESTORE_FAILURE: Final[int] = 2


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = EXIT_FAILURE) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


__all__ = ["EXIT_FAILURE", "EXIT_OK", "EXIT_RESTORE_FAILURE", "CLIError"]
