from datetime import datetime, timedelta

import pytest

from storyslip.services import conflict_service, lock_service, version_service
from storyslip.utils.errors import ValidationError

T0 = datetime(2026, 3, 1, 9, 0, 0)

PROPOSED = {"title": "Mine", "body": "My body", "excerpt": "Excerpt v3"}


def _lock(db, content, user, now=T0):
    return lock_service.acquire_lock(
        db, website_id=content.website_id, content_id=content.content_id, user_id=user.user_id, now=now,
    )


def test_clean_when_base_is_latest_and_unlocked(db, seed_users, seed_content):
    result = conflict_service.detect_conflicts(
        db, seed_content, user_id=seed_users["editor"].user_id, proposed=PROPOSED, base_version=3, now=T0,
    )
    assert result["status"] == conflict_service.CLEAN
    assert result["has_conflicts"] is False
    assert result["latest_version"] == 3
    assert result["conflicts"] == []


def test_clean_without_base_version(db, seed_users, seed_content):
    result = conflict_service.detect_conflicts(
        db, seed_content, user_id=seed_users["editor"].user_id, proposed=PROPOSED, now=T0,
    )
    assert result["status"] == conflict_service.CLEAN


def test_clean_when_caller_holds_lock(db, seed_users, seed_content):
    editor = seed_users["editor"]
    _lock(db, seed_content, editor)
    result = conflict_service.detect_conflicts(
        db, seed_content, user_id=editor.user_id, proposed=PROPOSED, base_version=3, now=T0,
    )
    assert result["status"] == conflict_service.CLEAN
    assert result["lock"]["locked_by"] == editor.user_id


def test_version_conflict_carries_latest_and_base(db, seed_users, seed_content):
    result = conflict_service.detect_conflicts(
        db, seed_content, user_id=seed_users["editor"].user_id, proposed=PROPOSED, base_version=2, now=T0,
    )
    assert result["status"] == conflict_service.VERSION_CONFLICT
    assert result["has_conflicts"] is True
    assert result["current_version"]["version_number"] == 3
    assert result["current_version"]["title"] == "Post v3"
    assert result["base_snapshot"]["version_number"] == 2

    by_field = {c["field"]: c for c in result["conflicts"]}
    assert set(by_field) == {"title", "body"}
    assert by_field["title"] == {
        "field": "title",
        "base_value": "Post v2",
        "current_value": "Post v3",
        "proposed_value": "Mine",
    }


def test_version_conflict_takes_precedence_over_lock(db, seed_users, seed_content):
    _lock(db, seed_content, seed_users["writer"])
    result = conflict_service.detect_conflicts(
        db, seed_content, user_id=seed_users["editor"].user_id, proposed=PROPOSED, base_version=1, now=T0,
    )
    assert result["status"] == conflict_service.VERSION_CONFLICT


def test_version_conflict_when_base_was_pruned(db, seed_users, seed_content):
    version_service.cleanup_versions(db, keep_versions=1)
    result = conflict_service.detect_conflicts(
        db, seed_content, user_id=seed_users["editor"].user_id, proposed=PROPOSED, base_version=1, now=T0,
    )
    assert result["status"] == conflict_service.VERSION_CONFLICT
    assert result["base_snapshot"] is None
    assert all(c["base_value"] is None for c in result["conflicts"])


def test_lock_conflict(db, seed_users, seed_content):
    writer = seed_users["writer"]
    _lock(db, seed_content, writer)
    result = conflict_service.detect_conflicts(
        db, seed_content, user_id=seed_users["editor"].user_id, proposed=PROPOSED, base_version=3,
        now=T0 + timedelta(minutes=1),
    )
    assert result["status"] == conflict_service.LOCK_CONFLICT
    assert result["lock"]["locked_by"] == writer.user_id
    assert result["lock"]["expires_at"] == T0 + timedelta(minutes=10)


def test_expired_lock_does_not_conflict(db, seed_users, seed_content):
    _lock(db, seed_content, seed_users["writer"])
    result = conflict_service.detect_conflicts(
        db, seed_content, user_id=seed_users["editor"].user_id, proposed=PROPOSED, base_version=3,
        now=T0 + timedelta(minutes=11),
    )
    assert result["status"] == conflict_service.CLEAN
    assert result["lock"] is None


def test_base_version_ahead_of_latest_is_invalid(db, seed_users, seed_content):
    with pytest.raises(ValidationError):
        conflict_service.detect_conflicts(
            db, seed_content, user_id=seed_users["editor"].user_id, proposed=PROPOSED, base_version=9, now=T0,
        )


def test_detection_never_writes(db, seed_users, seed_content):
    conflict_service.detect_conflicts(
        db, seed_content, user_id=seed_users["editor"].user_id, proposed=PROPOSED, base_version=1, now=T0,
    )
    assert version_service.latest_version_number(db, seed_content.content_id) == 3

