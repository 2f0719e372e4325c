import pytest

from random_sample.errors import HostAuthError, HostServiceError
from random_sample.library.base import BaseDtoService, BaseLibraryManager, HostUser


class MockLibraryManager(BaseLibraryManager):
    """In-memory stand-in for the host library service.

    Libraries map to item lists; hidden libraries resolve to None just
    like items the user cannot see on a real server.
    """

    def __init__(self):
        self.libraries = {}
        self.library_names = {}
        self.hidden = set()
        self.failing = set()
        self.queries = []
        self.resolved = []

    def add_library(self, library_id, items, name=None, collection_type=None):
        self.libraries[library_id] = list(items)
        self.library_names[library_id] = (name or library_id, collection_type)

    def get_user(self, token):
        if token == "bad-token":
            raise HostAuthError("rejected", status_code=401)
        return HostUser(id="user-1", name="alice", token=token)

    def get_user_libraries(self, user):
        return [
            {
                "Id": library_id,
                "Name": self.library_names[library_id][0],
                "Type": "CollectionFolder",
                "CollectionType": self.library_names[library_id][1],
            }
            for library_id in self.libraries
            if library_id not in self.hidden
        ]

    def get_item_by_id(self, item_id, user):
        self.resolved.append(item_id)
        if item_id not in self.libraries or item_id in self.hidden:
            return None
        return {"Id": item_id, "Type": "CollectionFolder"}

    def get_items(self, query, user):
        self.queries.append(query)
        if query.parent_id in self.failing:
            raise HostServiceError("database is locked", status_code=500)
        items = [
            item for item in self.libraries[query.parent_id]
            if item["Type"] in query.include_item_types
        ]
        if query.limit is not None:
            items = items[:query.limit]
        return items


class MockDtoService(BaseDtoService):
    """Conversion stand-in that tags each item with the requested fields."""

    def __init__(self):
        self.converted = []

    def get_base_item_dto(self, item, options, user):
        self.converted.append(item["Id"])
        return {**item, "Fields": list(options.fields)}


def make_items(prefix, count, item_type):
    """Create count items of one type with ids prefix-0 .. prefix-(count-1)."""
    return [{"Id": f"{prefix}-{i}", "Name": f"{prefix} {i}", "Type": item_type} for i in range(count)]


# ============== Fixtures ==============

@pytest.fixture
def user():
    return HostUser(id="user-1", name="alice", token="token-123")


@pytest.fixture
def library_manager():
    """Library manager with L1 (8 movies), L2 (5 series) and empty L3."""
    manager = MockLibraryManager()
    manager.add_library("L1", make_items("movie", 8, "Movie"), name="Movies", collection_type="movies")
    manager.add_library("L2", make_items("series", 5, "Series"), name="Shows", collection_type="tvshows")
    manager.add_library("L3", [], name="Empty")
    return manager


@pytest.fixture
def dto_service():
    return MockDtoService()
