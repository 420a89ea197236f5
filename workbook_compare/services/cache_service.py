"""
比较结果缓存

按比较编号保存 DiffResult，超过有效期后淘汰。供界面层在导出报告、
生成高亮文件时复用结果，比较服务本身不使用缓存。
"""
import logging
import threading
import time
import uuid
from typing import Callable, Dict, Optional, Tuple

from workbook_compare.models.diff_model import DiffResult

logger = logging.getLogger(__name__)


class ResultCache:
    """带有效期的比较结果缓存（线程安全）"""

    def __init__(self, ttl_seconds: float = 1800, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds 必须大于 0")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[float, DiffResult]] = {}

    def put(self, result: DiffResult) -> str:
        """保存结果，返回比较编号"""
        comparison_id = uuid.uuid4().hex
        with self._lock:
            self._entries[comparison_id] = (self._clock() + self.ttl_seconds, result)
        logger.debug("缓存比较结果 %s", comparison_id)
        return comparison_id

    def get(self, comparison_id: str) -> Optional[DiffResult]:
        """获取结果，不存在或已过期时返回 None"""
        with self._lock:
            entry = self._entries.get(comparison_id)
            if entry is None:
                return None
            expires_at, result = entry
            if self._clock() >= expires_at:
                del self._entries[comparison_id]
                logger.debug("比较结果 %s 已过期", comparison_id)
                return None
            return result

    def evict_expired(self) -> int:
        """淘汰所有过期结果，返回淘汰数量"""
        now = self._clock()
        with self._lock:
            expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.info("淘汰过期比较结果 %d 个", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
