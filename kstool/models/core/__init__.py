"""Core cluster models."""

from kstool.models.core.job_info import JobInfo

__all__ = ["JobInfo"]
