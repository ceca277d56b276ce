"""
Unit tests for the generic CrudService.
"""

from unittest.mock import Mock

import pytest

from hms.core.exceptions import NotFoundError, ValidationError
from hms.domain.entities import Building, Floor
from hms.domain.interfaces import IRepository
from hms.services.crud_service import CrudService


@pytest.fixture
def repo() -> Mock:
    mock = Mock(spec=IRepository)
    mock.update.side_effect = lambda entity: entity
    return mock


@pytest.fixture
def buildings() -> Mock:
    mock = Mock(spec=IRepository)
    mock.exists.return_value = True
    return mock


@pytest.fixture
def service(repo, buildings) -> CrudService:
    return CrudService(
        repo, "Floor", references={"building_id": ("Building", buildings)}
    )


def test_get_missing_raises_not_found(service, repo):
    repo.get_by_id.return_value = None

    with pytest.raises(NotFoundError, match="Floor 12 not found"):
        service.get(12)


def test_create_checks_references(service, repo, buildings):
    buildings.exists.return_value = False

    with pytest.raises(NotFoundError, match="Building 2 not found"):
        service.create(Floor(name="Ground", building_id=2))

    repo.create.assert_not_called()


def test_create_delegates_to_repository(service, repo):
    repo.create.return_value = Floor(id=1, name="Ground", building_id=2)

    created = service.create(Floor(name="Ground", building_id=2))

    assert created.id == 1


def test_update_merges_provided_fields(service, repo, buildings):
    repo.get_by_id.return_value = Floor(id=1, name="Ground", building_id=2)

    updated = service.update(1, {"name": "First"})

    assert updated.name == "First"
    assert updated.building_id == 2
    # Unchanged references are not re-checked
    buildings.exists.assert_not_called()


def test_update_rejects_invalid_merge(service, repo):
    repo.get_by_id.return_value = Floor(id=1, name="Ground", building_id=2)

    with pytest.raises(ValidationError, match="Floor name is required"):
        service.update(1, {"name": "  "})

    repo.update.assert_not_called()


def test_update_checks_changed_reference(service, repo, buildings):
    repo.get_by_id.return_value = Floor(id=1, name="Ground", building_id=2)
    buildings.exists.return_value = False

    with pytest.raises(NotFoundError, match="Building 5 not found"):
        service.update(1, {"building_id": 5})


def test_delete_returns_removed_entity(repo):
    service = CrudService(repo, "Building")
    building = Building(id=4, name="North Wing")
    repo.get_by_id.return_value = building
    repo.delete.return_value = True

    assert service.delete(4) is building
    repo.delete.assert_called_once_with(4)


def test_list_children_requires_parent(repo):
    service = CrudService(repo, "Building")
    repo.get_by_id.return_value = None
    floors = Mock(spec=IRepository)

    with pytest.raises(NotFoundError):
        service.list_children(1, floors, "building_id")

    floors.list_by.assert_not_called()


def test_related_data_uses_loaders(repo):
    service = CrudService(
        repo, "Section", related={"clinic_ids": lambda section_id: [section_id * 10]}
    )

    assert service.related_data(Building(id=3, name="x")) == {"clinic_ids": [30]}
