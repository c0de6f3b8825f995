"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy across the kaiblock crypto library.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every exception raised by the library derives from KaiblockException.
Exceptions that correspond to a builtin failure kind also derive from that
builtin (ValueError, IndexError) so callers can catch them either way.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the library."""

    # Merkle tree construction & proof requests
    EMPTY_INPUT = "EMPTY_INPUT"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Hash values
    INVALID_HASH = "INVALID_HASH"

    # Keys & signatures
    INVALID_KEY = "INVALID_KEY"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"

    # Addresses & encodings
    ADDRESS_ERROR = "ADDRESS_ERROR"
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class KaiblockError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to cross a boundary as data (CLI JSON output,
    logs) rather than as a raised exception.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "KaiblockException":
        """Convert this error model to the matching exception."""
        exc_cls = _EXCEPTIONS_BY_CODE.get(self.code)
        if exc_cls is None:
            return KaiblockException(
                code=self.code,
                message=self.message,
                details=self.details,
                retryable=self.retryable,
            )
        exc = exc_cls.__new__(exc_cls)
        KaiblockException.__init__(
            exc,
            message=self.message,
            code=self.code,
            details=self.details,
            retryable=self.retryable,
        )
        return exc


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class KaiblockException(Exception):
    """
    Base exception for all kaiblock errors.

    Carries structured error information and can be converted
    to/from KaiblockError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "KAIBLOCK_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> KaiblockError:
        """Convert this exception to a KaiblockError model."""
        return KaiblockError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(KaiblockException, ValueError):
    """Raised when a Merkle tree is built from zero items."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty item list",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class IndexOutOfRangeException(KaiblockException, IndexError):
    """Raised when a proof is requested for a leaf that does not exist."""

    def __init__(
        self,
        index: int,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf index {index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class InvalidHashException(KaiblockException, ValueError):
    """Raised when bytes or hex text cannot form a 32-byte hash."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_HASH,
            details=details,
            retryable=False,
        )


class InvalidKeyException(KaiblockException, ValueError):
    """Raised when key material has the wrong size or encoding."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_KEY,
            details=details,
            retryable=False,
        )


class InvalidSignatureException(KaiblockException, ValueError):
    """Raised when signature bytes are malformed (not when they fail to verify)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_SIGNATURE,
            details=details,
            retryable=False,
        )


class AddressException(KaiblockException, ValueError):
    """Raised when an address string cannot be parsed or fails its checksum."""

    def __init__(
        self,
        message: str,
        address: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if address is not None:
            full_details["address"] = address
        super().__init__(
            message=message,
            code=ErrorCodes.ADDRESS_ERROR,
            details=full_details,
            retryable=False,
        )


class SerializationException(KaiblockException, ValueError):
    """Raised when a serialized object (proof, keypair) cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.SERIALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class MerkleVerificationException(KaiblockException):
    """Raised when a caller demands that a Merkle proof verifies and it does not."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
            retryable=False,
        )


_EXCEPTIONS_BY_CODE: dict[str, type[KaiblockException]] = {
    ErrorCodes.EMPTY_INPUT: EmptyInputException,
    ErrorCodes.INDEX_OUT_OF_RANGE: IndexOutOfRangeException,
    ErrorCodes.INVALID_HASH: InvalidHashException,
    ErrorCodes.INVALID_KEY: InvalidKeyException,
    ErrorCodes.INVALID_SIGNATURE: InvalidSignatureException,
    ErrorCodes.ADDRESS_ERROR: AddressException,
    ErrorCodes.SERIALIZATION_ERROR: SerializationException,
    ErrorCodes.MERKLE_PROOF_INVALID: MerkleVerificationException,
}
