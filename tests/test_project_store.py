"""Unit tests for projects/store.py -- owner-scoped project persistence.

Covers:
- create_project() requires a non-blank title and stamps owner + timestamps
- list_projects() returns only the owner's rows, in insertion order
- delete_project() removes only when id and owner both match
"""

import pytest

from core.exceptions import ValidationError
from projects.store import ProjectStore

OWNER_A = 1
OWNER_B = 2


@pytest.fixture
def store(engine) -> ProjectStore:
    return ProjectStore(engine)


class TestCreateProject:
    def test_create_with_description(self, store: ProjectStore) -> None:
        project = store.create_project(OWNER_A, "Roadmap", "Q3 plans")
        assert project.id is not None
        assert project.user_id == OWNER_A
        assert project.title == "Roadmap"
        assert project.description == "Q3 plans"
        assert project.created_at == project.updated_at != ""

    def test_description_optional(self, store: ProjectStore) -> None:
        assert store.create_project(OWNER_A, "T").description is None

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_title_required(self, store: ProjectStore, title) -> None:
        with pytest.raises(ValidationError, match="Title is required"):
            store.create_project(OWNER_A, title)
        assert store.list_projects(OWNER_A) == []


class TestListProjects:
    def test_insertion_order(self, store: ProjectStore) -> None:
        titles = ["first", "second", "third"]
        for t in titles:
            store.create_project(OWNER_A, t)
        assert [p.title for p in store.list_projects(OWNER_A)] == titles

    def test_excludes_other_owners(self, store: ProjectStore) -> None:
        store.create_project(OWNER_A, "mine")
        store.create_project(OWNER_B, "theirs")
        assert [p.title for p in store.list_projects(OWNER_A)] == ["mine"]
        assert [p.title for p in store.list_projects(OWNER_B)] == ["theirs"]

    def test_empty_for_unknown_owner(self, store: ProjectStore) -> None:
        store.create_project(OWNER_A, "mine")
        assert store.list_projects(99) == []

    def test_fresh_snapshot_per_call(self, store: ProjectStore) -> None:
        before = store.list_projects(OWNER_A)
        store.create_project(OWNER_A, "new")
        assert before == []
        assert len(store.list_projects(OWNER_A)) == 1


class TestDeleteProject:
    def test_owner_can_delete(self, store: ProjectStore) -> None:
        project = store.create_project(OWNER_A, "T")
        assert store.delete_project(OWNER_A, project.id) is True
        assert store.list_projects(OWNER_A) == []

    def test_non_owner_delete_is_noop(self, store: ProjectStore) -> None:
        project = store.create_project(OWNER_A, "T")
        before = store.list_projects(OWNER_A)
        assert store.delete_project(OWNER_B, project.id) is False
        assert store.list_projects(OWNER_A) == before

    def test_missing_id_is_noop(self, store: ProjectStore) -> None:
        assert store.delete_project(OWNER_A, 12345) is False

    @pytest.mark.parametrize("project_id", [0, -1, 2**63, 10**23])
    def test_out_of_range_id_is_noop(self, store: ProjectStore, project_id: int) -> None:
        store.create_project(OWNER_A, "T")
        assert store.delete_project(OWNER_A, project_id) is False
        assert len(store.list_projects(OWNER_A)) == 1
