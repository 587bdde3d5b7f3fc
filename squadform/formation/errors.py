from __future__ import annotations


class FormationError(RuntimeError):
    code = "formation_error"
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class InvalidRequest(FormationError):
    code = "invalid_request"
    status_code = 400


class NoEligibleParticipants(FormationError):
    code = "no_eligible_participants"
    status_code = 400


class ResourceLimitExceeded(FormationError):
    code = "resource_limit_exceeded"
    status_code = 413


class ProcessingFailure(FormationError):
    code = "processing_failure"
    status_code = 500
