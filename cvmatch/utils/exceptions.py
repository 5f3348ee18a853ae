"""
Custom Exception Classes for the CV matching core
"""
from dataclasses import dataclass
from typing import Dict, Any, List, Optional
from fastapi import HTTPException


class CVMatchBaseException(Exception):
    """Base exception for the CV matching core"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/response"""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


@dataclass(frozen=True)
class FieldError:
    """One violated input field"""
    field: str
    message: str
    rejected_value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"field": self.field, "message": self.message}
        if self.rejected_value is not None:
            result["rejected_value"] = str(self.rejected_value)
        return result


class ValidationError(CVMatchBaseException):
    """Raised when candidate or job input is malformed"""

    def __init__(self, message: str, errors: List[FieldError] = None, **kwargs):
        self.errors = list(errors or [])
        details = kwargs.pop('details', {})
        if self.errors:
            details['errors'] = [e.to_dict() for e in self.errors]
        super().__init__(message, error_code="VALIDATION_ERROR", details=details, **kwargs)

    @property
    def fields(self) -> List[str]:
        return [e.field for e in self.errors]


class SaveError(CVMatchBaseException):
    """Raised when the external store fails to persist a candidate"""

    def __init__(
        self,
        message: str,
        candidate_name: Optional[str] = None,
        candidate_email: Optional[str] = None,
        **kwargs
    ):
        self.candidate_name = candidate_name
        self.candidate_email = candidate_email
        details = kwargs.pop('details', {})
        if candidate_name:
            details['candidate_name'] = candidate_name
        if candidate_email:
            details['candidate_email'] = candidate_email
        super().__init__(message, error_code="SAVE_ERROR", details=details, **kwargs)


class NotFoundError(CVMatchBaseException):
    """Raised when a candidate or job analysis id is unknown"""

    def __init__(
        self,
        message: str,
        resource: str = None,
        identifier: Optional[str] = None,
        email: Optional[str] = None,
        **kwargs
    ):
        self.resource = resource
        self.identifier = identifier
        self.email = email
        details = kwargs.pop('details', {})
        if resource:
            details['resource'] = resource
        if identifier:
            details['identifier'] = identifier
        if email:
            details['email'] = email
        super().__init__(message, error_code="NOT_FOUND", details=details, **kwargs)

    @classmethod
    def candidate(cls, candidate_id: str) -> "NotFoundError":
        return cls(f"Candidate not found with ID: {candidate_id}", resource="candidate", identifier=candidate_id)

    @classmethod
    def candidate_by_email(cls, email: str) -> "NotFoundError":
        return cls(f"Candidate not found with email: {email}", resource="candidate", email=email)

    @classmethod
    def job_analysis(cls, analysis_id: str) -> "NotFoundError":
        return cls(f"Job analysis not found with ID: {analysis_id}", resource="job_analysis", identifier=analysis_id)


class ExtractionDegraded(CVMatchBaseException):
    """Raised inside skill extraction when the main passes yield nothing usable"""

    def __init__(self, message: str, stage: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if stage:
            details['stage'] = stage
        super().__init__(message, error_code="EXTRACTION_DEGRADED", details=details, **kwargs)


class ExternalServiceError(CVMatchBaseException):
    """Raised when external service calls fail"""

    def __init__(self, message: str, service_name: str = None, status_code: int = None, **kwargs):
        details = kwargs.pop('details', {})
        if service_name:
            details['service_name'] = service_name
        if status_code:
            details['status_code'] = status_code
        super().__init__(message, error_code="EXTERNAL_SERVICE_ERROR", details=details, **kwargs)


# HTTP Exception Mapping
def map_to_http_exception(exc: CVMatchBaseException) -> HTTPException:
    """Map custom exceptions to HTTP exceptions"""

    status_code_mapping = {
        ValidationError: 400,
        NotFoundError: 404,
        SaveError: 500,
        ExtractionDegraded: 500,
        ExternalServiceError: 502,
    }

    status_code = status_code_mapping.get(type(exc), 500)

    detail = {
        "error": exc.to_dict(),
        "message": exc.message
    }

    return HTTPException(status_code=status_code, detail=detail)
