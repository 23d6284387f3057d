import pytest

from dropzarr import InMemoryOrder, OnDiskOrder


def test_on_disk_to_in_memory() -> None:
    disk = OnDiskOrder(("t", "c", "z", "y", "x"))
    memory = disk.to_in_memory()
    assert isinstance(memory, InMemoryOrder)
    assert memory == ("x", "y", "z", "c", "t")
    assert isinstance(memory.to_on_disk(), OnDiskOrder)
    assert memory.to_on_disk() == disk


def test_types_are_distinct() -> None:
    disk = OnDiskOrder((1.0, 2.0))
    assert not isinstance(disk, InMemoryOrder)
    assert not hasattr(disk, "to_on_disk")
    assert not hasattr(disk.to_in_memory(), "to_in_memory")
    assert repr(disk) == "OnDiskOrder((1.0, 2.0))"
    assert repr(disk.to_in_memory()) == "InMemoryOrder((2.0, 1.0))"


def test_index_in_memory() -> None:
    disk = OnDiskOrder(("t", "c", "z", "y", "x"))
    memory = disk.to_in_memory()
    for i, name in enumerate(disk):
        assert memory[disk.index_in_memory(i)] == name
    assert disk.index_in_memory(-1) == 0
    with pytest.raises(IndexError):
        disk.index_in_memory(5)
