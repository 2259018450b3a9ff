"""记录合并 - 会话与项目去重排序"""

import logging
from typing import Dict, Iterable, List, Set

from .models import RawCandidate, WorkspaceRecord

logger = logging.getLogger(__name__)


def _sort_key(record: WorkspaceRecord) -> tuple:
    # 会话在前，项目在后；组内按名称
    return (0 if record.is_active else 1, record.logical_name)


def merge(candidates: Iterable[RawCandidate]) -> List[WorkspaceRecord]:
    """按 logical_name 合并候选记录

    规则：
    - active 候选总是写入，并把名字标记为 pinned
    - project 候选只在名字未 pinned 时写入
    - 两个 project 重名时保留路径字典序较小的一个，并记录警告

    Returns:
        排好序的记录：先会话后项目，组内按名称升序
    """
    chosen: Dict[str, WorkspaceRecord] = {}
    pinned: Set[str] = set()

    for candidate in candidates:
        name = candidate.logical_name
        if candidate.is_active:
            chosen[name] = candidate
            pinned.add(name)
            continue

        if name in pinned:
            logger.debug(f"[合并] 项目 {candidate.path} 被同名会话 {name} 覆盖")
            continue

        existing = chosen.get(name)
        if existing is None:
            chosen[name] = candidate
            continue

        if existing.path == candidate.path:
            continue
        keep, drop = sorted((existing, candidate), key=lambda r: r.path)
        logger.warning(f"[合并] 项目名冲突 {name}: 使用 {keep.path}，忽略 {drop.path}")
        chosen[name] = keep

    return sorted(chosen.values(), key=_sort_key)
