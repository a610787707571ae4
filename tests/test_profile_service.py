"""Tests for profile management."""

from uuid import uuid4

import pytest

from bitebuddy.domain.errors import NotFoundError, ValidationError
from bitebuddy.domain.models import AuthenticatedUser
from bitebuddy.services.profiles import ProfileService
from tests.conftest import InMemoryProfileRepository


def test_ensure_profile_creates_once() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)
    user = AuthenticatedUser(
        id=uuid4(), email="sam@example.com", metadata={"full_name": "Sam Lee"}
    )

    created = service.ensure_profile(user)
    again = service.ensure_profile(user)

    assert created == again
    assert created.username == "sam@example.com"
    assert created.display_name == "Sam Lee"
    assert len(repository.profiles) == 1


def test_display_name_falls_back_to_email_then_user() -> None:
    service = ProfileService(InMemoryProfileRepository())

    from_email = service.ensure_profile(
        AuthenticatedUser(id=uuid4(), email="kim@example.com")
    )
    anonymous = service.ensure_profile(AuthenticatedUser(id=uuid4(), email=None))

    assert from_email.display_name == "kim"
    assert anonymous.display_name == "User"
    assert anonymous.username == str(anonymous.id)


def test_update_profile() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)
    profile = repository.add("sam")

    updated = service.update(profile.id, display_name="  Sammy ")

    assert updated.display_name == "Sammy"
    with pytest.raises(ValidationError, match="Nothing to update"):
        service.update(profile.id)
    with pytest.raises(ValidationError, match="cannot be empty"):
        service.update(profile.id, display_name=" ")
    with pytest.raises(NotFoundError):
        service.get(uuid4())


def test_search_excludes_caller() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)
    sam = repository.add("sam")
    repository.add("samantha")
    repository.add("alex")

    found = service.search(sam.id, "sam")

    assert [p.username for p in found] == ["samantha"]
    with pytest.raises(ValidationError):
        service.search(sam.id, "s")
