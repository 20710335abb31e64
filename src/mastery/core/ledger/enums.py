# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Enums for the verification ledger."""

from enum import Enum


class VerificationType(str, Enum):
    """How mastery was demonstrated."""
    QUIZ = "quiz"            # Self-reported quiz score
    ORACLE = "oracle"        # Attested by the configured oracle
    CHALLENGE = "challenge"  # Completed challenge

    @classmethod
    def parse(cls, value: "str | VerificationType") -> "VerificationType | None":
        """Return the member for ``value`` or None when unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


class ErrorKind(str, Enum):
    """Error taxonomy returned by public ledger operations."""
    NOT_AUTHORIZED = "NotAuthorized"
    INVALID_COURSE_ID = "InvalidCourseId"
    INVALID_SCORE = "InvalidScore"
    INVALID_THRESHOLD = "InvalidThreshold"
    INVALID_PROOF = "InvalidProof"
    ALREADY_VERIFIED = "AlreadyVerified"
    NOT_VERIFIED = "NotVerified"
    ORACLE_NOT_AUTHORIZED = "OracleNotAuthorized"
    INVALID_UPDATE_PARAM = "InvalidUpdateParam"
    MAX_VERIFICATIONS_EXCEEDED = "MaxVerificationsExceeded"
    INVALID_VERIFICATION_TYPE = "InvalidVerificationType"
    INVALID_DIFFICULTY = "InvalidDifficulty"
    INVALID_EXPIRY = "InvalidExpiry"
    INVALID_METADATA = "InvalidMetadata"
    TRANSFER_FAILED = "TransferFailed"
    NFT_ALREADY_ISSUED = "NftAlreadyIssued"

    @property
    def code(self) -> int:
        """Numeric code as used by the on-chain contract."""
        return _ERROR_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "ErrorKind":
        for kind, value in _ERROR_CODES.items():
            if value == code:
                return kind
        raise ValueError(f"Unknown error code: {code}")


_ERROR_CODES: dict[ErrorKind, int] = {
    ErrorKind.NOT_AUTHORIZED: 100,
    ErrorKind.INVALID_COURSE_ID: 101,
    ErrorKind.INVALID_SCORE: 103,
    ErrorKind.INVALID_THRESHOLD: 104,
    ErrorKind.INVALID_PROOF: 105,
    ErrorKind.ALREADY_VERIFIED: 106,
    ErrorKind.NOT_VERIFIED: 107,
    ErrorKind.ORACLE_NOT_AUTHORIZED: 109,
    ErrorKind.INVALID_UPDATE_PARAM: 113,
    ErrorKind.MAX_VERIFICATIONS_EXCEEDED: 114,
    ErrorKind.INVALID_VERIFICATION_TYPE: 115,
    ErrorKind.INVALID_DIFFICULTY: 116,
    ErrorKind.INVALID_EXPIRY: 117,
    ErrorKind.INVALID_METADATA: 118,
    ErrorKind.TRANSFER_FAILED: 121,
    ErrorKind.NFT_ALREADY_ISSUED: 122,
}
