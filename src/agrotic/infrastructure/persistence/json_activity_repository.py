"""JSON-file-backed implementations of the activity repositories."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from agrotic.domain.model.activity import Activity, Assignment
from agrotic.domain.repository.activity_repository import (
    ActivityRepository,
    AssignmentRepository,
)
from agrotic.infrastructure.persistence.json_table import JsonTable


def _opt_decimal(value: str | None) -> Decimal | None:
    return Decimal(value) if value is not None else None


def _opt_str(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


class JsonActivityRepository(ActivityRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    # --- ActivityRepository interface -----------------------------------------

    def get_by_id(self, activity_id: str) -> Activity | None:
        for raw in self._table.load_raw():
            if raw["id"] == activity_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Activity]:
        return [self._to_domain(raw) for raw in self._table.load_raw()]

    def save(self, activity: Activity) -> None:
        if activity.id is None:
            activity.id = self._table.next_id(self._table.load_raw())
        self._table.upsert(self._to_raw(activity))

    def delete(self, activity_id: str) -> None:
        self._table.delete_where("id", activity_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(activity: Activity) -> dict:
        return {
            "id": activity.id,
            "description": activity.description,
            "crop_zone_id": activity.crop_zone_id,
            "category_id": activity.category_id,
            "assigned_on": activity.assigned_on.isoformat(),
            "responsible_dni": activity.responsible_dni,
            "active": activity.active,
            "finished_at": activity.finished_at.isoformat() if activity.finished_at else None,
            "observation": activity.observation,
            "photo_url": activity.photo_url,
            "hours_worked": _opt_str(activity.hours_worked),
            "hourly_rate": _opt_str(activity.hourly_rate),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Activity:
        finished_at = raw.get("finished_at")
        return Activity(
            id=raw["id"],
            description=raw["description"],
            crop_zone_id=raw["crop_zone_id"],
            category_id=raw["category_id"],
            assigned_on=date.fromisoformat(raw["assigned_on"]),
            responsible_dni=int(raw["responsible_dni"]),
            active=raw.get("active", True),
            finished_at=datetime.fromisoformat(finished_at) if finished_at else None,
            observation=raw.get("observation"),
            photo_url=raw.get("photo_url"),
            hours_worked=_opt_decimal(raw.get("hours_worked")),
            hourly_rate=_opt_decimal(raw.get("hourly_rate")),
        )


class JsonAssignmentRepository(AssignmentRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    def list_by_activity(self, activity_id: str) -> list[Assignment]:
        return [
            Assignment(
                id=raw["id"],
                activity_id=raw["activity_id"],
                user_id=raw["user_id"],
                assigned_at=datetime.fromisoformat(raw["assigned_at"]),
                active=raw.get("active", True),
            )
            for raw in self._table.load_raw()
            if raw["activity_id"] == activity_id
        ]

    def add(self, assignment: Assignment) -> None:
        rows = self._table.load_raw()
        assignment.id = self._table.next_id(rows)
        rows.append(
            {
                "id": assignment.id,
                "activity_id": assignment.activity_id,
                "user_id": assignment.user_id,
                "assigned_at": assignment.assigned_at.isoformat(),
                "active": assignment.active,
            }
        )
        self._table.persist_raw(rows)

    def delete(self, assignment_id: str) -> None:
        self._table.delete_where("id", assignment_id)
