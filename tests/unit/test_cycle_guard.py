import pytest

from folio.core.folders.application.cycle_guard import CycleGuard
from folio.shared.exceptions import InvalidOperationError


@pytest.fixture
def tree(repo):
    # a -> b -> c, and a separate root d
    repo.add_folder("a")
    repo.add_folder("b", parent_id="a")
    repo.add_folder("c", parent_id="b")
    repo.add_folder("d")
    return repo


async def test_move_to_root_never_cycles(tree):
    assert await CycleGuard(tree).creates_cycle("t1", "a", None) is False


async def test_move_into_itself_cycles(tree):
    assert await CycleGuard(tree).creates_cycle("t1", "a", "a") is True


async def test_move_into_descendant_cycles(tree):
    guard = CycleGuard(tree)
    assert await guard.creates_cycle("t1", "a", "b") is True
    assert await guard.creates_cycle("t1", "a", "c") is True


async def test_move_into_unrelated_branch_is_allowed(tree):
    guard = CycleGuard(tree)
    assert await guard.creates_cycle("t1", "a", "d") is False
    assert await guard.creates_cycle("t1", "c", "a") is False


async def test_corrupt_chain_is_rejected_and_terminates(repo):
    repo.add_folder("x", parent_id="y")
    repo.add_folder("y", parent_id="x")
    repo.add_folder("z")

    assert await CycleGuard(repo).creates_cycle("t1", "z", "x") is True
    assert repo.parent_lookups <= 3


async def test_ensure_can_move_messages(tree):
    guard = CycleGuard(tree)

    with pytest.raises(InvalidOperationError, match="Cannot move folder into itself"):
        await guard.ensure_can_move("t1", "b", "b")

    with pytest.raises(InvalidOperationError, match="Cannot move folder into its own subfolder"):
        await guard.ensure_can_move("t1", "a", "c")

    await guard.ensure_can_move("t1", "c", "d")
