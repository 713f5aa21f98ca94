"""
记录服务测试
"""
import pytest
from sqlmodel import Session, select

from painting_agent.core.exceptions import ParameterError
from painting_agent.models import Idea, Painting, PaintingStatus


class TestInsertIdea:
    """创意写入测试"""

    def test_insert_assigns_id(self, records):
        idea = records.insert_idea(7, "summary", "full prompt")

        assert idea.id is not None
        assert idea.title_id == 7
        assert idea.summary == "summary"
        assert idea.full_prompt == "full prompt"

    def test_none_parameter_rejected_before_insert(self, records, test_db):
        with pytest.raises(ParameterError):
            records.insert_idea(7, None, "full prompt")

        with Session(test_db) as session:
            assert session.exec(select(Idea)).all() == []

    def test_list_ideas_by_title_in_creation_order(self, records):
        first = records.insert_idea(1, "first", "p1")
        second = records.insert_idea(1, "second", "p2")
        records.insert_idea(2, "other", "p3")

        ideas = records.list_ideas_by_title(1)
        assert [idea.id for idea in ideas] == [first.id, second.id]


class TestUpdatePaintingStatus:
    """绘画状态更新测试"""

    def test_update_sets_status_and_fields(self, records):
        records.ensure_painting(5)

        painting = records.update_painting_status(
            5, PaintingStatus.COMPLETED, image_url="uploads/a.png", error_message=None
        )

        assert painting.status == "completed"
        assert painting.image_url == "uploads/a.png"
        assert painting.error_message is None

    def test_accepts_plain_string_status(self, records):
        records.ensure_painting(5)
        painting = records.update_painting_status(5, "failed", error_message="boom")
        assert painting.status == "failed"
        assert painting.error_message == "boom"

    def test_unknown_status_rejected(self, records):
        records.ensure_painting(5)
        with pytest.raises(ParameterError):
            records.update_painting_status(5, "queued")

    def test_unknown_field_rejected(self, records, test_db):
        records.ensure_painting(5)
        with pytest.raises(ParameterError):
            records.update_painting_status(5, PaintingStatus.FAILED, reason="x")

        with Session(test_db) as session:
            painting = session.exec(select(Painting).where(Painting.idea_id == 5)).one()
            assert painting.status == "processing"

    def test_missing_row_returns_none(self, records):
        assert records.update_painting_status(404, PaintingStatus.PROCESSING) is None

    def test_ensure_painting_is_idempotent(self, records):
        first = records.ensure_painting(9)
        second = records.ensure_painting(9)
        assert first.id == second.id


class TestTimestamps:
    """时间戳测试"""

    def test_model_defaults_are_timezone_aware(self):
        painting = Painting(idea_id=1)
        idea = Idea(title_id=1, summary="s", full_prompt="p")

        assert painting.created_at.tzinfo is not None
        assert painting.updated_at.tzinfo is not None
        assert idea.created_at.tzinfo is not None

    def test_status_update_refreshes_updated_at(self, records):
        created = records.ensure_painting(21)
        updated = records.update_painting_status(21, PaintingStatus.COMPLETED, image_url="uploads/x.png")

        assert updated.updated_at.replace(tzinfo=None) >= created.updated_at.replace(tzinfo=None)
