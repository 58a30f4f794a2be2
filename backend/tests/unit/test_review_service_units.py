"""
Unit tests for review_service authorization branches.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from backend.app.errors import AppError, ErrorCode
from backend.app.models import cafe, review, user  # noqa: F401  (registers every mapper)
from backend.app.models.cafe import Cafe
from backend.app.models.review import Review
from backend.app.services import review_service


def _session_with(cafe=None, review=None) -> MagicMock:
    session = MagicMock()

    def _get(model, _id):
        if model is Cafe:
            return cafe
        if model is Review:
            return review
        return None

    session.get.side_effect = _get
    return session


def test_create_review_sets_author_and_cafe():
    session = _session_with(cafe=SimpleNamespace(id=3))

    review = review_service.create_review(
        caller_id=10,
        data={"cafe_id": 3, "answer": "Great latte."},
        session=session,
    )

    assert review.user_id == 10
    assert review.cafe_id == 3
    session.add.assert_called_once_with(review)


def test_create_review_for_missing_cafe_raises_404():
    session = _session_with(cafe=None)

    with pytest.raises(AppError) as exc_info:
        review_service.create_review(
            caller_id=10,
            data={"cafe_id": 3, "answer": "Great latte."},
            session=session,
        )

    assert exc_info.value.code == ErrorCode.CAFE_NOT_FOUND
    session.add.assert_not_called()


def test_create_review_as_someone_else_raises_403():
    session = _session_with(cafe=SimpleNamespace(id=3))

    with pytest.raises(AppError) as exc_info:
        review_service.create_review(
            caller_id=10,
            data={"cafe_id": 3, "answer": "Great latte.", "user_id": 11},
            session=session,
        )

    assert exc_info.value.code == ErrorCode.FORBIDDEN


def test_get_review_raises_when_missing():
    with pytest.raises(AppError) as exc_info:
        review_service.get_review(review_id=5, session=_session_with())

    assert exc_info.value.code == ErrorCode.REVIEW_NOT_FOUND
    assert exc_info.value.errors == ["Review with id of 5 could not be found."]


def test_delete_review_by_author():
    review = SimpleNamespace(id=5, user_id=10)
    session = _session_with(review=review)

    review_service.delete_review(review_id=5, caller_id=10, session=session)

    session.delete.assert_called_once_with(review)


def test_delete_review_by_other_user_is_forbidden():
    session = _session_with(review=SimpleNamespace(id=5, user_id=10))

    with pytest.raises(AppError) as exc_info:
        review_service.delete_review(review_id=5, caller_id=11, session=session)

    assert exc_info.value.http_status == 403
    session.delete.assert_not_called()


def test_list_reviews_returns_rows_in_query_order():
    rows = [SimpleNamespace(id=2), SimpleNamespace(id=1)]
    session = MagicMock()
    session.execute.return_value.scalars.return_value.all.return_value = rows

    assert review_service.list_reviews_for_cafe(cafe_id=3, session=session) == rows
