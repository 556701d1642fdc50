"""
The normalized Jenkins job value shared by the parser, ranker and search.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Job:
    """A Jenkins job, folder or multibranch branch.

    ``jobs`` is None when children were not requested; otherwise it holds the
    child jobs in their final order.
    """

    id: str
    name: str | None = None
    description: str | None = None
    status: str = "disabled"
    building: bool = False
    last_build: int | None = None
    pull_request_branch: bool = False
    jobs: list[Job] | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.id

    def to_dict(self) -> dict:
        """Render with the camelCase keys used by the Jenkins plugin's JSON API."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "building": self.building,
            "lastBuild": self.last_build,
            "pullRequestBranch": self.pull_request_branch,
            "jobs": None if self.jobs is None else [j.to_dict() for j in self.jobs],
        }
