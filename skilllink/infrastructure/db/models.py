"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean, Float,
    Numeric, ForeignKey, JSON, Index, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .database import Base


class UserModel(Base):
    """Marketplace identity"""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(50), unique=True)
    firstname = Column(String(100))
    lastname = Column(String(100))
    name = Column(String(255), nullable=False)
    password_hash = Column(String(255))
    role = Column(String(20), nullable=False, default='user')
    account_type = Column(String(20), nullable=False, default='skilled_worker')
    is_active = Column(Boolean, default=True)
    is_email_verified = Column(Boolean, default=False)
    is_phone_verified = Column(Boolean, default=False)

    # Login lockout
    failed_login_attempts = Column(Integer, default=0)
    lock_until = Column(DateTime)

    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    skilled_worker = relationship(
        "SkilledWorkerProfileModel", uselist=False, back_populates="user",
        cascade="all, delete-orphan", lazy="joined",
    )
    employer = relationship(
        "EmployerProfileModel", uselist=False, back_populates="user",
        cascade="all, delete-orphan", lazy="joined",
    )

    __table_args__ = (
        Index('idx_users_account_type', 'account_type', 'is_active'),
    )


class SkilledWorkerProfileModel(Base):
    """Searchable worker profile, one row per user"""
    __tablename__ = 'skilled_worker_profiles'

    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    profile_image = Column(String(500))
    full_name = Column(String(255))
    location = Column(String(255))
    contact_preference = Column(String(50))
    professional_title = Column(String(255))
    primary_skills = Column(JSON)
    years_of_experience = Column(Integer)
    languages_spoken = Column(JSON)
    hourly_rate = Column(Numeric(12, 2))
    availability = Column(String(50))
    rating = Column(Float, default=0.0)
    portfolio_samples = Column(JSON)
    certifications = Column(JSON)
    nin_document = Column(String(500))
    short_bio = Column(String(250))

    user = relationship("UserModel", back_populates="skilled_worker")
    skills = relationship(
        "WorkerSkillModel", back_populates="profile", cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index('idx_worker_profiles_rating', 'rating'),
        Index('idx_worker_profiles_location', 'location'),
    )


class WorkerSkillModel(Base):
    """Normalized skill keys for all-of skill filtering"""
    __tablename__ = 'worker_skills'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('skilled_worker_profiles.user_id', ondelete='CASCADE'), nullable=False)
    skill = Column(String(100), nullable=False)

    profile = relationship("SkilledWorkerProfileModel", back_populates="skills")

    __table_args__ = (
        UniqueConstraint('user_id', 'skill', name='unique_worker_skill'),
        Index('idx_worker_skills_skill', 'skill'),
    )


class EmployerProfileModel(Base):
    """Company profile, one row per user"""
    __tablename__ = 'employer_profiles'

    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    company_name = Column(String(255))
    company_logo = Column(String(500))
    location = Column(String(255))
    contact_preference = Column(String(50))
    industry = Column(JSON)
    website = Column(String(500))
    company_size = Column(String(20))
    short_bio = Column(String(250))
    verification_docs = Column(JSON)

    user = relationship("UserModel", back_populates="employer")


class JobModel(Base):
    """Job posting table"""
    __tablename__ = 'jobs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    employer_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    budget_min = Column(Numeric(12, 2), nullable=False)
    budget_max = Column(Numeric(12, 2), nullable=False)
    timeline = Column(String(255))
    required_skills = Column(JSON)
    is_active = Column(Boolean, default=True)

    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_jobs_employer', 'employer_id', 'is_active'),
    )


class InviteModel(Base):
    """Invite / application ledger"""
    __tablename__ = 'invites'

    id = Column(Integer, primary_key=True, autoincrement=True)
    employer_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    worker_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    job_id = Column(Integer, ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False)
    type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False)
    message = Column(Text)

    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_invites_worker_job', 'worker_id', 'job_id', 'type'),
        Index('idx_invites_employer', 'employer_id', 'type', 'status'),
    )


class ProjectModel(Base):
    """Project table"""
    __tablename__ = 'projects'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    category = Column(String(255))
    budget = Column(Numeric(12, 2), default=0)
    currency = Column(String(3), default='NGN')
    deadline = Column(DateTime)
    progress = Column(Integer, default=0)
    status = Column(String(20), nullable=False, default='active')
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    assigned_to = Column(Integer, ForeignKey('users.id'))
    job_id = Column(Integer, ForeignKey('jobs.id', ondelete='SET NULL'))

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    milestones = relationship(
        "MilestoneModel", back_populates="project", cascade="all, delete-orphan",
        order_by=lambda: [MilestoneModel.created_at, MilestoneModel.id],
    )

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index('idx_projects_created_by', 'created_by', 'status'),
        Index('idx_projects_assigned_to', 'assigned_to', 'status'),
    )


class MilestoneModel(Base):
    """Project milestones"""
    __tablename__ = 'milestones'

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    deadline = Column(DateTime)
    status = Column(String(20), nullable=False, default='not_started')
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    project = relationship("ProjectModel", back_populates="milestones")


class ProjectMessageModel(Base):
    """Project chat messages (append only)"""
    __tablename__ = 'project_messages'

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    sender_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_project_messages_project', 'project_id', 'created_at', 'id'),
    )


class SubmissionModel(Base):
    """Uploaded file references"""
    __tablename__ = 'project_submissions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    uploaded_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    url = Column(String(1000), nullable=False)
    filename = Column(String(255))
    note = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_project_submissions_project', 'project_id', 'created_at', 'id'),
    )


class ProjectEventModel(Base):
    """Append-only project event log"""
    __tablename__ = 'project_events'

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    type = Column(String(30), nullable=False)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    text = Column(Text)
    data = Column(JSON)
    related_event_id = Column(Integer, ForeignKey('project_events.id'))
    created_at = Column(DateTime, default=datetime.utcnow)

    resolution = relationship(
        "EventResolutionModel", uselist=False, back_populates="event", lazy="joined",
    )

    __table_args__ = (
        Index('idx_project_events_project', 'project_id', 'created_at', 'id'),
        Index('idx_project_events_type', 'project_id', 'type'),
    )


class EventResolutionModel(Base):
    """Resolution of a payment request or extension request"""
    __tablename__ = 'event_resolutions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey('project_events.id', ondelete='CASCADE'), nullable=False, unique=True)
    kind = Column(String(20), nullable=False)
    resolved_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    data = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow)

    event = relationship("ProjectEventModel", back_populates="resolution")


class PaymentModel(Base):
    """Payment ledger"""
    __tablename__ = 'payments'

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default='completed')
    worker_id = Column(Integer, ForeignKey('users.id'))
    employer_id = Column(Integer, ForeignKey('users.id'))
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='SET NULL'))
    amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(String(3), default='NGN')
    note = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_payments_worker', 'worker_id', 'type', 'status'),
        Index('idx_payments_employer', 'employer_id', 'type', 'status'),
    )


class WalletModel(Base):
    """Materialized balance per user"""
    __tablename__ = 'wallets'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)
    balance = Column(Numeric(14, 2), nullable=False, default=0)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    __mapper_args__ = {"version_id_col": version}


class NotificationModel(Base):
    """In-app notifications"""
    __tablename__ = 'notifications'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    account_type = Column(String(20))
    title = Column(String(255))
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default='system')
    link = Column(String(500))
    meta = Column(JSON)
    is_read = Column(Boolean, default=False)
    read_at = Column(DateTime)
    email_sent = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_notifications_user', 'user_id', 'is_read', 'created_at'),
    )


class ReviewModel(Base):
    """Project reviews"""
    __tablename__ = 'reviews'

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    reviewer_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    reviewee_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    rating = Column(Integer, nullable=False)
    public_feedback = Column(Text)
    private_feedback = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('project_id', 'reviewer_id', 'reviewee_id', name='unique_review_per_pair'),
        Index('idx_reviews_reviewee', 'reviewee_id'),
    )
