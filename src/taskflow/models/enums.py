"""Shared enums for models."""

from enum import Enum


class TaskStatus(str, Enum):
    """Task workflow status."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GoalType(str, Enum):
    """Goal period."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class GoalUnit(str, Enum):
    """What a goal counts."""

    TASKS = "tasks"
    HOURS = "hours"
    PROJECTS = "projects"


class SummaryPeriod(str, Enum):
    """Window for the time summary report."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
