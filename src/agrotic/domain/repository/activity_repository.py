"""Abstract repositories for the Activity aggregate and its assignments."""

from __future__ import annotations

from abc import ABC, abstractmethod

from agrotic.domain.model.activity import Activity, Assignment


class ActivityRepository(ABC):

    @abstractmethod
    def get_by_id(self, activity_id: str) -> Activity | None:
        """Return an activity by its ID, or None."""

    @abstractmethod
    def list_all(self) -> list[Activity]:
        """Return every activity."""

    @abstractmethod
    def save(self, activity: Activity) -> None:
        """Persist a new or updated activity, assigning an ID to new ones."""

    @abstractmethod
    def delete(self, activity_id: str) -> None:
        """Remove an activity row."""


class AssignmentRepository(ABC):

    @abstractmethod
    def list_by_activity(self, activity_id: str) -> list[Assignment]:
        """Return the users assigned to an activity."""

    @abstractmethod
    def add(self, assignment: Assignment) -> None:
        """Persist a new assignment."""

    @abstractmethod
    def delete(self, assignment_id: str) -> None:
        """Remove one assignment row."""
