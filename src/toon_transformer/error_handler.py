"""Error handling implementation for the TOON Transformer."""

import logging
from typing import Optional

from .types import (
    ErrorResponse,
    ErrorType,
    ToonError,
    ToonFormatError,
    ToonValidationError,
    ValidationError,
    ValidationResult,
)
from .utils.validation import ValidationUtils


class ErrorHandler:
    """
    Applies the strict/lenient policy for decoding problems.

    Format errors are always fatal. Count and indentation mismatches raise
    in strict mode; in lenient mode they are logged and handed back to the
    decoder so it can return a best-effort result.
    """

    def __init__(self, strict: bool = True, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            strict: Raise on validation violations instead of recording them
            logger: Optional logger instance for error reporting
        """
        self.strict = strict
        self.logger = logger or logging.getLogger(__name__)

    def violation(self, message: str, error_type: ErrorType,
                  line: Optional[int] = None) -> ValidationError:
        """
        Report a strict-mode violation.

        Returns:
            The recorded ValidationError in lenient mode

        Raises:
            ToonValidationError: If strict mode is enabled
        """
        if self.strict:
            raise ToonValidationError(message, error_type, line)

        location = f"line {line}" if line is not None else None
        self.logger.warning(f"{message} ({location or 'unknown location'}); continuing")
        return ValidationError(type=error_type, message=message, location=location)

    def format_error(self, message: str, line: Optional[int] = None) -> None:
        """
        Report a malformed construct.

        Raises:
            ToonFormatError: Always, regardless of strict mode
        """
        self.logger.error(f"Format error: {message}")
        raise ToonFormatError(message, line)

    def validate_input(self, text: str, indent: int) -> ValidationResult:
        """
        Validate TOON input before decoding.

        Args:
            text: TOON text to validate
            indent: Configured spaces per level

        Returns:
            ValidationResult with validation details
        """
        try:
            warnings = ValidationUtils.validate_toon_text(text, indent)
        except Exception as e:
            self.logger.error(f"Unexpected error during input validation: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Validation failed with unexpected error: {str(e)}",
                    location="input"
                )],
                warnings=[]
            )

        for warning in warnings:
            self.logger.debug(warning)
        return ValidationResult(is_valid=True, errors=[], warnings=warnings)

    def handle_error(self, error: ToonError) -> ErrorResponse:
        """
        Describe how a caller can recover from an error.

        Args:
            error: ToonError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"TOON error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.FORMAT:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Fix the array header: the character before ']' must be "
                                 "nothing or ',' (comma), a space (tab) or '|' (pipe)."
            )
        elif error.error_type in (ErrorType.LENGTH, ErrorType.FIELD_COUNT, ErrorType.INDENTATION):
            return ErrorResponse(
                can_recover=True,
                suggested_action="Correct the declared array length or row contents, "
                                 "or decode in lenient mode to accept a best-effort result."
            )
        elif error.error_type == ErrorType.STRUCTURE:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Use only null, booleans, numbers, strings, string-keyed "
                                 "objects and arrays, without self references."
            )
        elif error.error_type == ErrorType.SYNTAX:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Check that the input is well-formed for its format."
            )
        elif error.error_type == ErrorType.CONVERSION:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Check the source document and the conversion options "
                                 "(array path, nested data handling, attribute prefix)."
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry."
            )
