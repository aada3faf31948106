"""Job snapshot models."""

from pydantic import BaseModel, Field

from kstool.constants.enums import JobStatus


class JobInfo(BaseModel):
    """One Kubernetes Job row as shown in the jobs table.

    Rebuilt from scratch on every snapshot and never mutated afterwards.
    """

    name: str
    namespace: str = ""
    owner: str | None = None
    status: JobStatus
    completions: str
    duration: str
    age: str
    pod_count: int = 0
    gpu_count: int = 0
    gpu_info: str
    labels: dict[str, str] = Field(default_factory=dict)

    def is_owned_by(self, identity: str) -> bool:
        """Return True when the ownership label matches *identity*."""
        return bool(identity) and self.owner == identity
