"""
临时文件管理测试
"""
import asyncio
import base64
import binascii

import pytest

from painting_agent.services.temp_files import TempFileManager

DATA = base64.b64encode(b"reference-bytes").decode("ascii")


def test_create_writes_decoded_file(tmp_path):
    manager = TempFileManager(tmp_path)

    path = asyncio.run(manager.create_temp_file(DATA, prefix="ref_0"))

    assert path.parent == tmp_path
    assert path.name.startswith("ref_0_")
    assert path.read_bytes() == b"reference-bytes"
    assert manager.files == [path]


def test_file_names_are_unique(tmp_path):
    manager = TempFileManager(tmp_path)

    async def create_many():
        return await asyncio.gather(*(manager.create_temp_file(DATA) for _ in range(5)))

    paths = asyncio.run(create_many())
    assert len(set(paths)) == 5


def test_invalid_base64_propagates(tmp_path):
    manager = TempFileManager(tmp_path)
    with pytest.raises(binascii.Error):
        asyncio.run(manager.create_temp_file("@@not base64@@"))
    assert manager.files == []


def test_cleanup_removes_all_files(tmp_path):
    manager = TempFileManager(tmp_path)

    async def scenario():
        await manager.create_temp_file(DATA)
        await manager.create_temp_file(DATA)
        await manager.cleanup()

    asyncio.run(scenario())

    assert list(tmp_path.iterdir()) == []
    assert manager.files == []


def test_cleanup_survives_missing_and_stuck_files(tmp_path):
    manager = TempFileManager(tmp_path)
    first = asyncio.run(manager.create_temp_file(DATA))
    second = asyncio.run(manager.create_temp_file(DATA))
    first.unlink()

    # 目录无法被 unlink，模拟删除失败
    stuck = tmp_path / "stuck_dir"
    stuck.mkdir()
    manager._files.insert(0, stuck)

    asyncio.run(manager.cleanup())

    assert not second.exists()
    assert stuck.exists()
    assert manager.files == []
