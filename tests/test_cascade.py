import pytest

from core import cascade
from core.associations import set_links
from core.attachments import append_attachment
from core.errors import NotFoundError, StoreError
from core.schema import (
    FILES,
    MINIATURE_FILES,
    MINIATURE_IMAGES,
    MINIATURE_PAINTS,
    MINIATURE_PROJECT_PAINTS,
    MINIATURE_PROJECT_TECHNIQUES,
    MINIATURE_PROJECTS,
    MINIATURE_TECHNIQUE_LINKS,
    MINIATURE_THEMES,
    PROFILE,
    PROFILE_ID,
    SKILL_TYPES,
    SKILLS,
    TECHNIQUES,
)
from helpers import add_file, add_miniature, add_paint, add_skill, add_technique, run


def test_delete_missing_row_is_not_found(store):
    with pytest.raises(NotFoundError):
        run(cascade.delete(store, MINIATURE_PAINTS, 5))


def test_deleting_a_paint_drops_its_links_only(store):
    project_id = add_miniature(store)
    paint_id = add_paint(store, "Mephiston Red")
    run(store.insert(MINIATURE_PROJECT_PAINTS, {"miniature_project_id": project_id, "paint_id": paint_id}))

    run(cascade.delete(store, MINIATURE_PAINTS, paint_id))

    assert store.rows(MINIATURE_PROJECT_PAINTS) == []
    assert len(store.rows(MINIATURE_PROJECTS)) == 1


def test_deleting_a_theme_nulls_member_projects(store):
    theme_id = run(store.insert(MINIATURE_THEMES, {"name": "Grimdark"}))["id"]
    project_id = add_miniature(store, theme_id=theme_id)

    run(cascade.delete(store, MINIATURE_THEMES, theme_id))

    assert run(store.find_by_id(MINIATURE_PROJECTS, project_id))["theme_id"] is None


def test_deleting_a_file_cascades_attachments_and_nulls_references(store):
    project_id = add_miniature(store)
    file_id = add_file(store)
    run(append_attachment(store, MINIATURE_IMAGES, project_id, file_id))
    run(store.upsert(PROFILE, PROFILE_ID, {"full_name": "Ada", "avatar_file_id": file_id}))

    run(cascade.delete(store, FILES, file_id))

    assert store.rows(MINIATURE_FILES) == []
    assert run(store.find_by_id(PROFILE, PROFILE_ID))["avatar_file_id"] is None
    assert run(store.find_by_id(MINIATURE_PROJECTS, project_id)) is not None


def test_skill_type_in_use_cannot_be_deleted(store):
    add_skill(store, "Go", type_name="Languages")
    type_id = store.rows(SKILL_TYPES)[0]["id"]

    with pytest.raises(StoreError) as info:
        run(cascade.delete(store, SKILL_TYPES, type_id))

    assert info.value.public_message == "failed to delete skill type"
    assert len(store.rows(SKILLS)) == 1
    assert len(store.rows(SKILL_TYPES)) == 1


def test_project_delete_leaves_shared_rows(store):
    project_id = add_miniature(store)
    file_id = add_file(store)
    technique_id = add_technique(store, "Edge highlight")
    run(append_attachment(store, MINIATURE_IMAGES, project_id, file_id))
    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, [technique_id]))

    run(cascade.delete(store, MINIATURE_PROJECTS, project_id))

    assert store.rows(MINIATURE_FILES) == []
    assert store.rows(MINIATURE_PROJECT_TECHNIQUES) == []
    assert len(store.rows(FILES)) == 1
    assert len(store.rows(TECHNIQUES)) == 1
