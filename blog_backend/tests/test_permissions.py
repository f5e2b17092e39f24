from __future__ import annotations

from app.core.permissions import can_mutate


def test_author_may_mutate():
    assert can_mutate("64b7f0c2a1b2c3d4e5f60718", {"author": "64b7f0c2a1b2c3d4e5f60718"})


def test_other_user_may_not_mutate():
    assert not can_mutate("64b7f0c2a1b2c3d4e5f60719", {"author": "64b7f0c2a1b2c3d4e5f60718"})


def test_missing_identity_never_matches():
    assert not can_mutate(None, {"author": "64b7f0c2a1b2c3d4e5f60718"})
    assert not can_mutate("", {"author": ""})


def test_post_without_author_is_not_mutable():
    assert not can_mutate("64b7f0c2a1b2c3d4e5f60718", {})
