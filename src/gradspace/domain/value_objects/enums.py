from __future__ import annotations

from enum import StrEnum


class ChannelEventType(StrEnum):
    NEW_MESSAGE = "NEW_MESSAGE"
    MESSAGES_SEEN = "MESSAGES_SEEN"
    MARK_MESSAGES_AS_SEEN = "MARK_MESSAGES_AS_SEEN"
    ONLINE_USERS = "ONLINE_USERS"


class UserRole(StrEnum):
    ADMIN = "Admin"
    STUDENT = "Student"
    FACULTY = "Faculty"
    ALUMNI = "Alumni"


class RegistrationStatus(StrEnum):
    PENDING = "pending"
    REGISTERED = "registered"
    REJECTED = "rejected"
    NOT_REGISTERED = "not_registered"


class UserAction(StrEnum):
    PROMOTE = "promote"
    DEMOTE = "demote"
    REMOVE = "remove"


class RequestDecision(StrEnum):
    APPROVE = "approve"
    REJECT = "reject"


class ReportKind(StrEnum):
    JOB = "job"
    EVENT = "event"
    POST = "post"


class AdminSection(StrEnum):
    USERS = "users"
    REQUESTS = "requests"
    ANALYTICS = "analytics"
    JOBS = "jobs"
    EVENTS = "events"
    POST = "post"
