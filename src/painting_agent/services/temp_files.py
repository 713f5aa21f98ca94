"""
临时文件管理 - 单次生成调用内创建的临时文件，调用结束后统一清理
"""
import asyncio
import base64
import time
import uuid
from pathlib import Path

from painting_agent.core import get_logger

logger = get_logger(__name__)


class TempFileManager:
    """
    临时文件管理器

    每次生成调用创建一个实例，不跨调用共享
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)
        self._files: list[Path] = []

    @property
    def files(self) -> list[Path]:
        return list(self._files)

    async def create_temp_file(self, data: str, prefix: str = "temp") -> Path:
        """解码 base64 内容写入临时文件，返回文件路径"""
        content = base64.b64decode(data, validate=True)
        file_name = f"{prefix}_{time.time_ns()}_{uuid.uuid4().hex[:8]}.png"
        path = self.directory / file_name

        await asyncio.to_thread(path.write_bytes, content)
        self._files.append(path)
        return path

    async def _remove(self, path: Path) -> None:
        try:
            if path.exists():
                await asyncio.to_thread(path.unlink)
                logger.debug(f"已删除临时文件: {path}")
        except OSError as e:
            logger.error(f"删除临时文件失败 {path}: {e}")

    async def cleanup(self) -> None:
        """并行删除所有已记录的临时文件，单个失败不影响其他文件"""
        files, self._files = self._files, []
        if not files:
            return
        await asyncio.gather(*(self._remove(path) for path in files), return_exceptions=True)
