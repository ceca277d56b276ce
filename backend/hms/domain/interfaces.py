"""
Abstract interfaces for repositories.

Services depend on these contracts rather than on SQLAlchemy, so unit tests
can hand them ``Mock(spec=...)`` doubles.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from .entities import RoomType, User


class IRepository(ABC):
    """Generic read/write contract shared by every resource repository."""

    @abstractmethod
    def list_all(self) -> List[Any]:
        pass

    @abstractmethod
    def get_by_id(self, entity_id: int) -> Optional[Any]:
        pass

    @abstractmethod
    def exists(self, entity_id: int) -> bool:
        pass

    @abstractmethod
    def list_by(self, **filters) -> List[Any]:
        pass

    @abstractmethod
    def create(self, entity: Any) -> Any:
        pass

    @abstractmethod
    def update(self, entity: Any) -> Any:
        pass

    @abstractmethod
    def delete(self, entity_id: int) -> bool:
        pass


class IRoomAvailability(ABC):
    """Read-only occupancy query used by the room allocator."""

    @abstractmethod
    def is_available(self, room_id: int) -> bool:
        """True when no pharmacy, clinic or warehouse references the room."""
        pass


class IRoomRepository(IRepository, IRoomAvailability):
    @abstractmethod
    def get_room_type(self, room_id: int) -> Optional[RoomType]:
        pass


class IUserRepository(IRepository):
    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_password_hash(self, email: str) -> Optional[str]:
        pass

    @abstractmethod
    def create_with_role(self, user: User, role_name: str) -> User:
        """Insert the user and grant the named role (created when missing)."""
        pass

    @abstractmethod
    def get_permissions(self, user_id: int) -> List[str]:
        """Sorted union of permission route names over the user's roles."""
        pass
