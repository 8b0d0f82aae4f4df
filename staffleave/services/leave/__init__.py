"""
Leave Service Layer

Eligibility and workflow rules for leave and swap requests:
- Monthly quotas per contract type
- Penalty windows from absences and medical certificates
- Submission eligibility gate
- Substitute filtering
- Multi-date batch selection and request submission
- Request workflow with signatures
- Birthday leave eligibility and staff administration helpers

All services take the unit's SystemSettings at construction and return
ServiceResult objects; the underlying rule objects raise the exceptions
from staffleave.core.exceptions.
"""

from staffleave.services.leave.batch_service import BatchService, DateBatch
from staffleave.services.leave.birthday_service import BirthdayService
from staffleave.services.leave.eligibility_service import EligibilityService
from staffleave.services.leave.penalty_service import PenaltyService
from staffleave.services.leave.quota_service import QuotaService
from staffleave.services.leave.submission_service import SubmissionService
from staffleave.services.leave.substitute_service import SubstituteService
from staffleave.services.leave.user_service import UserService
from staffleave.services.leave.workflow_service import RequestWorkflow, WorkflowService

__all__ = [
    "BatchService",
    "DateBatch",
    "BirthdayService",
    "EligibilityService",
    "PenaltyService",
    "QuotaService",
    "SubmissionService",
    "SubstituteService",
    "UserService",
    "RequestWorkflow",
    "WorkflowService",
]
