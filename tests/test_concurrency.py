from concurrent.futures import ThreadPoolExecutor

import pytest

from partsflow.core.errors import NotFoundError
from partsflow.schemas.inventory import MovementCreate
from partsflow.schemas.part import PartCreate, PartUpdate
from partsflow.storage.memory import MemStorage


def _run(worker, count: int) -> None:
    with ThreadPoolExecutor(max_workers=8) as pool:
        # list() re-raises the first worker exception.
        list(pool.map(worker, range(count)))


def test_concurrent_movements_on_one_part_lose_no_updates(storage):
    part = storage.create_part(PartCreate(name="Spark Plug", part_number="SP-1", quantity=0))

    def receive(_):
        storage.create_movement(MovementCreate(part_id=part.id, type="in", quantity=1))

    _run(receive, 200)

    assert storage.get_part(part.id).quantity == 200
    assert len(storage.get_movements_by_part(part.id)) == 200


def test_concurrent_mixed_movements_stay_non_negative(storage):
    part = storage.create_part(PartCreate(name="Fuse", part_number="FU-1", quantity=50))

    def move(index):
        movement_type = "out" if index % 2 else "in"
        storage.create_movement(MovementCreate(part_id=part.id, type=movement_type, quantity=1))

    _run(move, 200)

    # Equal numbers of +1 and -1 starting above zero never hit the clamp.
    assert storage.get_part(part.id).quantity == 50


def test_concurrent_reads_alongside_movements(storage):
    part = storage.create_part(PartCreate(name="Relay", part_number="RL-1", quantity=0))

    def work(index):
        if index % 3:
            storage.create_movement(MovementCreate(part_id=part.id, type="in", quantity=1))
        else:
            storage.get_inventory_stats()
            storage.get_movements()

    _run(work, 150)

    assert storage.get_part(part.id).quantity == 100
    assert len(storage.get_movements()) == 100


def test_unknown_part_ids_do_not_accumulate_locks():
    storage = MemStorage()
    part = storage.create_part(PartCreate(name="Bolt", part_number="BT-1", quantity=1))

    for index in range(50):
        storage.create_movement(MovementCreate(part_id=f"ghost-{index}", type="in", quantity=1))
        with pytest.raises(NotFoundError):
            storage.update_part(f"nope-{index}", PartUpdate(quantity=1))

    assert storage._part_locks == {}
    assert len(storage.get_movements()) == 0

    storage.create_movement(MovementCreate(part_id=part.id, type="in", quantity=1))
    assert set(storage._part_locks) == {part.id}

    storage.delete_part(part.id)
    assert storage._part_locks == {}
