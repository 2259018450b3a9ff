"""项目发现 - 扫描项目目录下的版本库"""

import os
import logging
from pathlib import Path
from typing import Iterator, List, Union

from .config import SessionizerConfig
from .models import RawCandidate
from .naming import sanitize
from .selection import has_reserved_chars

logger = logging.getLogger(__name__)


def walk_for_vcs_roots(
    base_dir: Union[str, Path],
    max_depth: int,
    marker: str = '.git',
) -> Iterator[str]:
    """查找 base_dir 下深度 1..max_depth 的版本库标记目录

    等价于 find BASE -mindepth 1 -maxdepth N -type d -name MARKER：
    不跟随符号链接，不进入标记目录内部，无权限的目录直接跳过。

    Yields:
        标记目录路径（如 /home/u/Projects/alpha/.git）
    """
    root = os.path.abspath(os.path.expanduser(str(base_dir)))
    root_depth = root.rstrip(os.sep).count(os.sep)

    def on_error(err: OSError) -> None:
        logger.debug(f"[发现] 跳过不可读目录: {err.filename}")

    for dirpath, dirnames, _ in os.walk(root, onerror=on_error):
        depth = dirpath.rstrip(os.sep).count(os.sep) - root_depth
        # 子目录深度为 depth + 1
        if depth + 1 > max_depth:
            dirnames[:] = []
            continue
        dirnames.sort()
        if marker in dirnames:
            yield os.path.join(dirpath, marker)
            dirnames.remove(marker)


def discover_projects(config: SessionizerConfig) -> List[RawCandidate]:
    """扫描项目目录，生成 project 候选记录

    Args:
        config: 配置（projects_dir, scan_depth, vcs_marker）

    Returns:
        候选列表（可能有重名，由合并步骤处理）
    """
    candidates = []
    for marker_path in walk_for_vcs_roots(config.projects_dir, config.scan_depth, config.vcs_marker):
        project_dir = os.path.dirname(marker_path)
        basename = os.path.basename(project_dir.rstrip(os.sep))
        if not basename or basename == '.':
            continue
        if has_reserved_chars(project_dir):
            logger.warning(f"[发现] 路径包含保留字符，已跳过: {project_dir!r}")
            continue
        candidates.append(RawCandidate(
            logical_name=sanitize(basename),
            kind='project',
            path=project_dir,
        ))

    logger.info(f"[发现] {config.projects_dir}: 找到 {len(candidates)} 个项目")
    return candidates
