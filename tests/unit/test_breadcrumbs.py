from folio.core.folders.application.breadcrumbs import Breadcrumb, BreadcrumbResolver


async def test_root_folder_has_single_crumb(repo):
    root = repo.add_folder("root-folder", name="Labs")

    crumbs = await BreadcrumbResolver(repo).resolve("t1", root)

    assert crumbs == [Breadcrumb(id="root-folder", name="Labs")]


async def test_path_is_root_first(repo):
    repo.add_folder("a", name="Labs")
    repo.add_folder("b", parent_id="a", name="PC-Reports")
    leaf = repo.add_folder("c", parent_id="b", name="2025")

    crumbs = await BreadcrumbResolver(repo).resolve("t1", leaf)

    assert [c.name for c in crumbs] == ["Labs", "PC-Reports", "2025"]
    assert crumbs[-1].id == "c"


async def test_missing_parent_stops_walk(repo):
    orphan = repo.add_folder("o", parent_id="gone", name="Orphan")

    crumbs = await BreadcrumbResolver(repo).resolve("t1", orphan)

    assert [c.id for c in crumbs] == ["o"]


async def test_cycle_is_truncated(repo):
    repo.add_folder("x", parent_id="y")
    repo.add_folder("y", parent_id="x")

    crumbs = await BreadcrumbResolver(repo).resolve("t1", repo.folders["x"])

    assert [c.id for c in crumbs] == ["y", "x"]


async def test_depth_limit(repo):
    parent = None
    for i in range(10):
        parent = repo.add_folder(f"f{i}", parent_id=parent.id if parent else None)

    crumbs = await BreadcrumbResolver(repo, max_depth=4).resolve("t1", parent)

    assert len(crumbs) == 4
    assert crumbs[-1].id == "f9"
