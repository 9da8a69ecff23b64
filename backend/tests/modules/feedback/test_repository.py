"""Tests for modules/feedback."""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from modules.feedback.models import FeedbackRequest
from modules.feedback.repository import FeedbackRepository


class TestFeedbackRequest:
    def test_valid(self):
        feedback = FeedbackRequest(feedback="Great", category="ui", priority="low")
        assert feedback.category == "ui"

    @pytest.mark.parametrize("missing", ["feedback", "category", "priority"])
    def test_every_field_required(self, missing):
        data = {"feedback": "Great", "category": "ui", "priority": "low"}
        data[missing] = ""
        with pytest.raises(ValidationError):
            FeedbackRequest(**data)


class TestFeedbackRepository:
    def test_insert(self):
        db = MagicMock()
        FeedbackRepository(db).insert(
            "u1", FeedbackRequest(feedback="Great", category="ui", priority="low")
        )
        db.table.assert_called_once_with("user_feedback")
        row = db.table.return_value.insert.call_args.args[0]
        assert row["user_id"] == "u1"
        assert row["feedback"] == "Great"
        assert row["priority"] == "low"
        assert "created_at" in row
