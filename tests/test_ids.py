from recipebox.ids import new_recipe_id, sequential_ids


def test_new_recipe_id_is_non_empty_and_unique():
    ids = {new_recipe_id() for _ in range(1000)}

    assert len(ids) == 1000
    assert all(ids)


def test_sequential_ids_count_up_from_start():
    next_id = sequential_ids(prefix="r", start=5)

    assert [next_id(), next_id(), next_id()] == ["r5", "r6", "r7"]


def test_sequential_generators_are_independent():
    first = sequential_ids()
    second = sequential_ids()

    assert first() == "recipe-1"
    assert first() == "recipe-2"
    assert second() == "recipe-1"
