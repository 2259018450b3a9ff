"""主流程 - 列出会话与项目，选择，落地

流程：
1. 检查 tmux、选择器与项目目录
2. 收集存活会话与项目，合并去重排序
3. 交给选择器，用户选中一行
4. 解码选择结果，attach/切换或新建会话
"""

import sys
import logging
from typing import List, Mapping, Optional, Sequence

from .backend import SessionBackend
from .config import SessionizerConfig
from .discovery import discover_projects
from .errors import EnvironmentCheckError, SessionizerError
from .inventory import list_active_sessions
from .materializer import detect_attach_mode, materialize
from .merger import merge
from .models import WorkspaceRecord
from .picker import Picker, get_picker
from .selection import decode, encode_record
from .tmux_control import TmuxController

logger = logging.getLogger(__name__)


def collect_records(config: SessionizerConfig, backend: SessionBackend) -> List[WorkspaceRecord]:
    """收集并合并会话与项目"""
    candidates = list_active_sessions(backend)
    candidates.extend(discover_projects(config))
    records = merge(candidates)
    logger.info(f"[流程] 候选 {len(candidates)} 条，合并后 {len(records)} 条")
    return records


def to_lines(records: Sequence[WorkspaceRecord]) -> List[str]:
    """编码成选择器输入，跳过无法编码的记录"""
    lines = []
    for record in records:
        try:
            lines.append(encode_record(record))
        except ValueError as e:
            logger.warning(f"[流程] 跳过记录 {record.logical_name!r}: {e}")
    return lines


def preflight(config: SessionizerConfig, backend: SessionBackend) -> None:
    """启动检查（不做任何修改）

    Raises:
        EnvironmentCheckError: tmux 不可用或项目目录不存在
    """
    if not backend.is_available():
        raise EnvironmentCheckError("未找到 tmux，请安装: sudo apt install tmux")
    if not config.projects_dir.is_dir():
        raise EnvironmentCheckError(f"项目目录 '{config.projects_dir}' 不存在")


def run(
    query: str,
    config: SessionizerConfig,
    backend: Optional[SessionBackend] = None,
    picker: Optional[Picker] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """执行一次完整流程

    Args:
        query: 选择器初始查询
        config: 配置
        backend: 终端复用器，默认 TmuxController
        picker: 选择器，默认按配置选择
        environ: 环境变量（判断 attach/switch），默认 os.environ

    Returns:
        退出码：成功、取消、无内容为 0，可报告的失败为 1
    """
    backend = backend or TmuxController()
    try:
        preflight(config, backend)
        picker = picker or get_picker(config)

        records = collect_records(config, backend)
        lines = to_lines(records)
        if not lines:
            print(f"在 '{config.projects_dir}' 中没有找到任何会话或项目")
            return 0

        selected = picker.pick_one(lines, query)
        if selected is None:
            logger.info("[流程] 用户取消或无匹配")
            return 0

        decision = decode(selected)
        logger.info(f"[流程] 选择: {decision}")
        materialize(
            decision,
            detect_attach_mode(environ),
            backend,
            windows=config.windows,
            initial_window=config.initial_window,
        )
        return 0
    except SessionizerError as e:
        logger.error(f"[流程] {type(e).__name__}: {e}")
        print(f"错误: {e}", file=sys.stderr)
        return e.exit_code
