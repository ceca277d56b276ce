"""
Unit tests for RoomAllocator with a mocked room repository.
"""

from unittest.mock import Mock

import pytest

from hms.core.exceptions import ConflictError, NotFoundError
from hms.domain.interfaces import IRoomRepository
from hms.services.room_allocator import RoomAllocator


@pytest.fixture
def room_repo() -> Mock:
    repo = Mock(spec=IRoomRepository)
    repo.exists.return_value = True
    repo.is_available.return_value = True
    return repo


@pytest.fixture
def allocator(room_repo) -> RoomAllocator:
    return RoomAllocator(room_repo)


class TestIsAvailable:
    def test_free_room_is_available(self, allocator, room_repo):
        assert allocator.is_available(7) is True
        room_repo.is_available.assert_called_once_with(7)

    def test_held_room_is_not_available(self, allocator, room_repo):
        room_repo.is_available.return_value = False
        assert allocator.is_available(7) is False

    def test_does_not_check_existence(self, allocator, room_repo):
        room_repo.exists.return_value = False
        assert allocator.is_available(999) is True
        room_repo.exists.assert_not_called()

    def test_repeated_calls_agree(self, allocator):
        assert allocator.is_available(3) == allocator.is_available(3)


class TestEnsureClaimable:
    def test_free_existing_room_passes(self, allocator):
        allocator.ensure_claimable(5)

    def test_missing_room_raises_not_found(self, allocator, room_repo):
        room_repo.exists.return_value = False
        with pytest.raises(NotFoundError, match="Room 5 not found"):
            allocator.ensure_claimable(5)
        room_repo.is_available.assert_not_called()

    def test_occupied_room_raises_conflict(self, allocator, room_repo):
        room_repo.is_available.return_value = False
        with pytest.raises(ConflictError, match="already occupied"):
            allocator.ensure_claimable(5)


class TestAvailability:
    def test_reports_room_status(self, allocator, room_repo):
        room_repo.is_available.return_value = False
        assert allocator.availability(4) == {"room_id": 4, "available": False}

    def test_missing_room_raises_not_found(self, allocator, room_repo):
        room_repo.exists.return_value = False
        with pytest.raises(NotFoundError):
            allocator.availability(4)
