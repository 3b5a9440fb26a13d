"""
Data Transfer Objects for the application layer.
"""

from .base_dto import BaseDTO, RequestDTO, ResponseDTO, PaginationDTO, PartySummaryDTO, dump_all
from .user_dto import (
    RegisterRequestDTO,
    LoginRequestDTO,
    SendOtpRequestDTO,
    VerifyOtpRequestDTO,
    UpdateProfileRequestDTO,
    EmployerStepRequestDTO,
    UserResponseDTO,
    WorkerCardDTO,
    AuthResponseDTO,
)
from .job_dto import (
    CreateJobRequestDTO,
    UpdateJobRequestDTO,
    ApplyToJobRequestDTO,
    JobResponseDTO,
    JobSummaryDTO,
)
from .invite_dto import CreateInviteRequestDTO, InviteResponseDTO
from .project_dto import (
    CreateProjectRequestDTO,
    UpdateProjectRequestDTO,
    MilestoneRequestDTO,
    MessageRequestDTO,
    SubmissionRequestDTO,
    RequestPaymentDTO,
    ExtendDeadlineDTO,
    DeadlineExtensionRequestDTO,
    ApproveDeadlineExtensionDTO,
    SupportRequestDTO,
    ProjectResponseDTO,
    MilestoneResponseDTO,
    MessageResponseDTO,
    SubmissionResponseDTO,
    ProjectEventResponseDTO,
)
from .payment_dto import (
    DepositRequestDTO,
    PayWorkerRequestDTO,
    WithdrawalRequestDTO,
    PaymentResponseDTO,
    EmployerOverviewDTO,
    WorkerOverviewDTO,
)
from .notification_dto import CreateNotificationRequestDTO, NotificationResponseDTO
from .review_dto import CreateReviewRequestDTO, ReviewResponseDTO, ReviewStatsDTO

__all__ = [
    # Base
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "PaginationDTO",
    "PartySummaryDTO",
    "dump_all",

    # Users
    "RegisterRequestDTO",
    "LoginRequestDTO",
    "SendOtpRequestDTO",
    "VerifyOtpRequestDTO",
    "UpdateProfileRequestDTO",
    "EmployerStepRequestDTO",
    "UserResponseDTO",
    "WorkerCardDTO",
    "AuthResponseDTO",

    # Jobs and invites
    "CreateJobRequestDTO",
    "UpdateJobRequestDTO",
    "ApplyToJobRequestDTO",
    "JobResponseDTO",
    "JobSummaryDTO",
    "CreateInviteRequestDTO",
    "InviteResponseDTO",

    # Projects
    "CreateProjectRequestDTO",
    "UpdateProjectRequestDTO",
    "MilestoneRequestDTO",
    "MessageRequestDTO",
    "SubmissionRequestDTO",
    "RequestPaymentDTO",
    "ExtendDeadlineDTO",
    "DeadlineExtensionRequestDTO",
    "ApproveDeadlineExtensionDTO",
    "SupportRequestDTO",
    "ProjectResponseDTO",
    "MilestoneResponseDTO",
    "MessageResponseDTO",
    "SubmissionResponseDTO",
    "ProjectEventResponseDTO",

    # Payments
    "DepositRequestDTO",
    "PayWorkerRequestDTO",
    "WithdrawalRequestDTO",
    "PaymentResponseDTO",
    "EmployerOverviewDTO",
    "WorkerOverviewDTO",

    # Notifications and reviews
    "CreateNotificationRequestDTO",
    "NotificationResponseDTO",
    "CreateReviewRequestDTO",
    "ReviewResponseDTO",
    "ReviewStatsDTO",
]
