from types import SimpleNamespace

from labcatalog.services.tree import CategoryTree


def _row(id, name, parent_id=None, display_order=0, active=True):
    return SimpleNamespace(
        id=id,
        name=name,
        description=None,
        image_url=None,
        active=active,
        display_order=display_order,
        parent_id=parent_id,
    )


def test_roots_and_children_keep_row_order():
    tree = CategoryTree.from_rows(
        [
            _row(2, "Air", display_order=1),
            _row(4, "Dairy", parent_id=1, display_order=1),
            _row(3, "Meat", parent_id=1, display_order=1),
            _row(1, "Food", display_order=2),
        ]
    )

    assert [n.name for n in tree.roots()] == ["Air", "Food"]
    assert [n.name for n in tree.children(1)] == ["Dairy", "Meat"]
    assert tree.get(4).name == "Dairy"
    assert tree.get(99) is None
    assert tree.parent(3).name == "Food"
    assert tree.parent(1) is None
    assert tree.children(99) == []


def test_depth_and_anomalies():
    tree = CategoryTree.from_rows(
        [
            _row(1, "Root"),
            _row(2, "Sub", parent_id=1),
            _row(3, "Grandchild", parent_id=2),
            _row(4, "Dangling", parent_id=42),
            _row(5, "Self", parent_id=5),
            _row(6, "Loop A", parent_id=7),
            _row(7, "Loop B", parent_id=6),
        ]
    )

    assert tree.depth(1) == 1
    assert tree.depth(2) == 2
    assert tree.depth(3) == 3
    assert tree.depth(4) == -1
    assert tree.depth(6) == -1
    assert [n.id for n in tree.dangling()] == [4]
    assert [n.id for n in tree.self_parented()] == [5]
    assert [n.id for n in tree.deeper_than(2)] == [3]
    assert tree.children(5) == []
    assert 4 in tree and 42 not in tree
    assert len(tree) == 7


def test_load_active_only_drops_inactive_branches(db):
    from labcatalog.schemas.category import CategoryCreateIn, CategoryUpdateIn
    from labcatalog.services import categories

    root = categories.create_category(db, CategoryCreateIn(name="Root"))
    child = categories.create_category(db, CategoryCreateIn(name="Child", parent_id=root.id))
    categories.update_category(db, root.id, CategoryUpdateIn(active=False))

    full = CategoryTree.load(db)
    active = CategoryTree.load(db, active_only=True)

    assert [n.id for n in full.children(root.id)] == [child.id]
    assert root.id not in active
    assert active.roots() == []
    assert [n.id for n in active.dangling()] == [child.id]


def test_load_orders_siblings_like_the_detail_view(db):
    from labcatalog.schemas.category import CategoryCreateIn
    from labcatalog.services import categories

    root = categories.create_category(db, CategoryCreateIn(name="Root"))
    for name in ("apple", "Banana", "cherry", "Apple"):
        categories.create_category(db, CategoryCreateIn(name=name, parent_id=root.id, display_order=1))
    categories.create_category(db, CategoryCreateIn(name="Zinc", parent_id=root.id, display_order=0))

    tree = CategoryTree.load(db)
    from_tree = [n.name for n in tree.children(root.id)]
    listed = [s.name for s in categories.list_public(db)[0].subcategories]
    detail = [s.name for s in categories.get_public(db, root.id).subcategories]

    assert from_tree == listed == detail
    assert from_tree[0] == "Zinc"
