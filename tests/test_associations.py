import pytest

from core import reads
from core.associations import set_links
from core.errors import StoreError
from core.schema import MINIATURE_PAINT_LINKS, MINIATURE_PROJECT_TECHNIQUES, MINIATURE_TECHNIQUE_LINKS, TECHNIQUES
from helpers import add_miniature, add_paint, add_technique, run


def _linked(store, project_id):
    return sorted(
        r["technique_id"] for r in store.rows(MINIATURE_PROJECT_TECHNIQUES) if r["miniature_project_id"] == project_id
    )


def test_replace_is_exact(store):
    project_id = add_miniature(store)
    t1, t2, t3 = (add_technique(store, n) for n in ("Drybrush", "Wash", "Glaze"))

    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, [t1, t2]))
    assert _linked(store, project_id) == [t1, t2]

    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, [t2, t3]))
    assert _linked(store, project_id) == [t2, t3]


def test_empty_list_clears(store):
    project_id = add_miniature(store)
    t1 = add_technique(store, "Drybrush")
    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, [t1]))

    assert run(set_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, [])) == []
    assert _linked(store, project_id) == []
    assert len(store.rows(TECHNIQUES)) == 1


def test_duplicates_collapse(store):
    project_id = add_miniature(store)
    t1 = add_technique(store, "Drybrush")
    t2 = add_technique(store, "Wash")

    linked = run(set_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, [t2, t1, t2]))

    assert linked == [t2, t1]
    assert _linked(store, project_id) == [t1, t2]


def test_unknown_child_rolls_back_to_previous_set(store):
    project_id = add_miniature(store)
    t1 = add_technique(store, "Drybrush")
    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, [t1]))

    with pytest.raises(StoreError) as info:
        run(set_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, [t1, 999]))

    assert info.value.public_message == "failed to set techniques for miniature project"
    assert _linked(store, project_id) == [t1]


def test_other_parents_are_untouched(store):
    first = add_miniature(store, "First")
    second = add_miniature(store, "Second")
    t1 = add_technique(store, "Drybrush")
    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, first, [t1]))
    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, second, [t1]))

    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, first, []))

    assert _linked(store, first) == []
    assert _linked(store, second) == [t1]


def test_link_sets_are_independent_per_association(store):
    project_id = add_miniature(store)
    t1 = add_technique(store, "Drybrush")
    p1 = add_paint(store, "Abaddon Black")
    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, [t1]))

    run(set_links(store, MINIATURE_PAINT_LINKS, project_id, [p1]))

    assert _linked(store, project_id) == [t1]


def test_replacement_runs_in_one_transaction(store):
    project_id = add_miniature(store)
    t1 = add_technique(store, "Drybrush")
    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, project_id, [t1]))
    assert store.transactions == 1
    assert store.ops_for("delete_where") == [MINIATURE_PROJECT_TECHNIQUES.name]
    assert store.ops_for("insert_many") == [MINIATURE_PROJECT_TECHNIQUES.name]


def test_linked_rows_gives_each_parent_its_own_child_copy(store):
    first = add_miniature(store, "Orc")
    second = add_miniature(store, "Elf")
    t1 = add_technique(store, "Drybrush")
    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, first, [t1]))
    run(set_links(store, MINIATURE_TECHNIQUE_LINKS, second, [t1]))

    linked = run(reads.linked_rows(store, MINIATURE_TECHNIQUE_LINKS, [first, second]))
    linked[first][0]["name"] = "changed"

    assert linked[first][0] is not linked[second][0]
    assert linked[second][0]["name"] == "Drybrush"
    assert run(store.find_by_id(TECHNIQUES, t1))["name"] == "Drybrush"
