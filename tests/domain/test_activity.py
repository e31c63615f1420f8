"""Unit tests for the Activity aggregate."""

from datetime import date
from decimal import Decimal

import pytest

from agrotic.domain.exceptions import AuthorizationError, ValidationError
from agrotic.domain.model.activity import Activity


def _activity() -> Activity:
    return Activity.create("Spray zone B", "z1", "cat1", date(2024, 3, 1), 1001)


class TestCreate:

    def test_new_activity_is_active(self):
        a = _activity()
        assert a.id is None
        assert a.active
        assert a.finished_at is None

    def test_blank_description_rejected(self):
        with pytest.raises(ValidationError, match="description is required"):
            Activity.create("  ", "z1", "cat1", date(2024, 3, 1), 1001)


class TestApply:

    def test_shallow_merge(self):
        a = _activity()
        a.apply({"description": "Spray zone C", "observation": "windy"})
        assert a.description == "Spray zone C"
        assert a.observation == "windy"

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="active, responsible_dni"):
            _activity().apply({"responsible_dni": 7, "active": False})


class TestFinalize:

    def test_responsible_user_finalizes(self):
        a = _activity()
        a.finalize(observation="done", hours=Decimal("6"), hourly_rate=Decimal("9000"), acting_dni=1001)
        assert not a.active
        assert a.finished_at is not None
        assert a.observation == "done"
        assert a.hours_worked == Decimal("6")

    def test_other_user_rejected(self):
        a = _activity()
        with pytest.raises(AuthorizationError, match="Only the responsible user"):
            a.finalize(acting_dni=2002)
        assert a.active

    def test_finalize_twice_rejected(self):
        a = _activity()
        a.finalize(acting_dni=1001)
        with pytest.raises(ValidationError, match="already finalized"):
            a.finalize(acting_dni=1001)
