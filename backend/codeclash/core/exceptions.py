"""
Error taxonomy shared by services and routers.
Each error knows its HTTP status; the mapping to a JSON body lives in main.py.
"""

from typing import Any, Optional


class CodeClashError(Exception):
    """Base exception for every failure reported to API clients"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(CodeClashError):
    """Missing or malformed request field"""
    status_code = 400


class UnsupportedLanguageError(ValidationError):
    """Submission language has no judge mapping"""


class AuthenticationError(CodeClashError):
    """Credentials did not match a known user"""
    status_code = 401


class AuthorizationError(CodeClashError):
    """Caller's role does not permit the operation"""
    status_code = 403


class NotFoundError(CodeClashError):
    status_code = 404


class UpstreamError(CodeClashError):
    """An external collaborator failed"""
    status_code = 500


class JudgeUnavailableError(UpstreamError):
    """The judge call failed; details hold the upstream payload"""


class StorageError(CodeClashError):
    """A query or write against the contest store failed"""
    status_code = 500
