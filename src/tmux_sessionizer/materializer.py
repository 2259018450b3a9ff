"""会话落地 - attach/切换到已有会话，或为项目新建会话"""

import os
import logging
from typing import Literal, Mapping, Optional, Sequence

from .backend import SessionBackend
from .errors import InvalidProjectPathError, StaleSessionError
from .models import DEFAULT_WINDOWS, SelectionDecision, WindowSpec

logger = logging.getLogger(__name__)

AttachMode = Literal['attach', 'switch']


def detect_attach_mode(environ: Optional[Mapping[str, str]] = None) -> AttachMode:
    """在 tmux 客户端内（$TMUX 非空）用 switch，否则 attach"""
    env = os.environ if environ is None else environ
    return 'switch' if env.get('TMUX') else 'attach'


def _enter(backend: SessionBackend, name: str, mode: AttachMode) -> None:
    if mode == 'switch':
        print(f"切换到会话: {name}")
        backend.switch_to(name)
    else:
        print(f"连接到会话: {name}")
        backend.attach(name)


def materialize(
    decision: SelectionDecision,
    attach_mode: AttachMode,
    backend: SessionBackend,
    windows: Sequence[WindowSpec] = DEFAULT_WINDOWS,
    initial_window: Optional[str] = None,
) -> None:
    """把用户选择变成一个已连接的会话

    状态转换：
    - 会话存在 → attach/switch
    - 会话不存在且不是项目 → StaleSessionError（不回退到同名项目）
    - 会话不存在且是项目 → 校验路径 → 新建会话 → 选中初始 window → attach/switch

    Raises:
        StaleSessionError: 会话在列出后被关闭
        InvalidProjectPathError: 项目目录已不存在
        TmuxCommandError: tmux 调用失败（已创建的 window 不回滚）
    """
    name = decision.logical_name

    if backend.session_exists(name):
        logger.info(f"[落地] 会话已存在: {name}")
        _enter(backend, name, attach_mode)
        return

    if not decision.is_project:
        logger.error(f"[落地] 会话已消失: {name}")
        raise StaleSessionError(name)

    path = decision.project_path
    if not path or not os.path.isdir(path):
        logger.error(f"[落地] 项目路径无效: {name} -> {path}")
        raise InvalidProjectPathError(name, path)

    print(f"新建并连接到会话: {name}")
    backend.create_session(name, path, windows)
    backend.select_window(name, initial_window or windows[0].label)
    _enter(backend, name, attach_mode)
