# tests/services/test_base.py
"""Tests for store failure handling shared by all services."""

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from wikireview.core.errors import StoreError
from wikireview.services.comments import CommentTreeStore


def _operational_error() -> OperationalError:
    return OperationalError("INSERT INTO comments", {}, Exception("disk I/O error"))


def test_commit_failure_becomes_store_error(db_session, mocker) -> None:
    mocker.patch.object(db_session, "commit", side_effect=_operational_error())
    rollback = mocker.spy(db_session, "rollback")

    with pytest.raises(StoreError) as excinfo:
        CommentTreeStore(db_session).add_comment(1, "Page", "text")

    assert excinfo.value.message == "Failed to create comment"
    assert isinstance(excinfo.value.original_error, OperationalError)
    rollback.assert_called_once()


def test_store_failure_is_opaque_over_http(client, db_session, mocker) -> None:
    mocker.patch.object(db_session, "commit", side_effect=_operational_error())

    response = client.post("/api/v1/comments", json={"subjectId": 1, "text": "hello"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error"}
