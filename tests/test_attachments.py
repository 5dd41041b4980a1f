import pytest

from core.attachments import append_attachment, next_order
from core.errors import NotFoundError, StoreError
from core.schema import MINIATURE_FILES, MINIATURE_IMAGES, MINIATURE_PROJECTS
from helpers import add_file, add_miniature, run


def _fake_url(file_type, key):
    return f"https://cdn.test/{file_type}/{key}"


def test_first_attachment_gets_order_zero(store):
    project_id = add_miniature(store)
    file_id = add_file(store)

    image = run(append_attachment(store, MINIATURE_IMAGES, project_id, file_id, "front", url_builder=_fake_url))

    assert image["display_order"] == 0
    assert image["miniature_project_id"] == project_id
    assert image["file_id"] == file_id
    assert image["caption"] == "front"
    assert image["url"] == "https://cdn.test/images/k/photo.jpg"
    assert image["file"]["file_name"] == "photo.jpg"
    assert image["created_at"] is not None


def test_orders_are_consecutive(store):
    project_id = add_miniature(store)
    files = [add_file(store, f"{n}.jpg") for n in range(3)]

    orders = [run(append_attachment(store, MINIATURE_IMAGES, project_id, f))["display_order"] for f in files]

    assert orders == [0, 1, 2]


def test_orders_are_per_parent(store):
    first = add_miniature(store, "First")
    second = add_miniature(store, "Second")
    f1, f2 = add_file(store, "a.jpg"), add_file(store, "b.jpg")

    run(append_attachment(store, MINIATURE_IMAGES, first, f1))
    run(append_attachment(store, MINIATURE_IMAGES, first, f2))
    image = run(append_attachment(store, MINIATURE_IMAGES, second, f1))

    assert image["display_order"] == 0


def test_gaps_are_not_filled(store):
    project_id = add_miniature(store)
    files = [add_file(store, f"{n}.jpg") for n in range(3)]
    images = [run(append_attachment(store, MINIATURE_IMAGES, project_id, f)) for f in files]

    run(store.delete(MINIATURE_FILES, images[1]["id"]))
    assert run(next_order(store, MINIATURE_IMAGES, project_id)) == 3

    run(store.delete(MINIATURE_FILES, images[2]["id"]))
    assert run(next_order(store, MINIATURE_IMAGES, project_id)) == 1


def test_missing_parent_inserts_nothing(store):
    file_id = add_file(store)

    with pytest.raises(NotFoundError) as info:
        run(append_attachment(store, MINIATURE_IMAGES, 12, file_id))

    assert str(info.value) == "miniature project not found"
    assert store.rows(MINIATURE_FILES) == []


def test_unknown_asset_is_a_store_error(store):
    project_id = add_miniature(store)

    with pytest.raises(StoreError) as info:
        run(append_attachment(store, MINIATURE_IMAGES, project_id, 555))

    assert info.value.public_message == "failed to add miniature image"
    assert store.rows(MINIATURE_FILES) == []


def test_parent_row_is_locked_before_computing_order(store):
    project_id = add_miniature(store)
    file_id = add_file(store)

    run(append_attachment(store, MINIATURE_IMAGES, project_id, file_id))

    assert store.locked == [(MINIATURE_PROJECTS.name, project_id)]
    kinds = [kind for (kind, _) in store.ops]
    assert kinds.index("lock_row") < kinds.index("max_value") < kinds.index("insert", kinds.index("lock_row"))


def test_default_url_uses_files_api(store):
    project_id = add_miniature(store)
    file_id = add_file(store, "cover.png")

    image = run(append_attachment(store, MINIATURE_IMAGES, project_id, file_id))

    assert image["url"] == "http://files.test/api/v1/files/images/k/cover.png"
