"""fzf 预览窗口内容"""

import os
import stat
import subprocess
from datetime import datetime
from typing import Optional

from .errors import DecodeError
from .models import KIND_TAGS
from .selection import DELIMITER, decode
from .tmux_control import TmuxController

PREVIEW_LINES = 10


def _format_entry(path: str, name: str) -> str:
    try:
        st = os.lstat(os.path.join(path, name))
    except OSError:
        return f"?????????? {name}"
    mtime = datetime.fromtimestamp(st.st_mtime).strftime('%b %d %H:%M')
    return f"{stat.filemode(st.st_mode)} {st.st_size:>8} {mtime} {name}"


def list_directory(path: str, limit: int = PREVIEW_LINES) -> list[str]:
    """类似 ls -lah 的目录列表（含隐藏文件，按名称排序）"""
    try:
        names = sorted(os.listdir(path))
    except OSError as e:
        return [f"无法读取目录: {e}"]
    return [_format_entry(path, name) for name in names[:limit]]


def git_log(path: str, limit: int = PREVIEW_LINES) -> list[str]:
    """最近的提交图"""
    try:
        result = subprocess.run(
            ['git', '-C', path, 'log', '--oneline', '--graph', '--decorate', '--all', '-n', str(limit)],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        return ["不是 git 仓库或没有提交历史"]
    if result.returncode != 0 or not result.stdout.strip():
        return ["不是 git 仓库或没有提交历史"]
    return result.stdout.rstrip('\n').splitlines()


def render_preview(line: str, tmux: Optional[TmuxController] = None) -> str:
    """根据选择器当前行生成预览文本

    类型标签不是 [Active]/[Project] 的行视为未知类型。
    """
    fields = line.rstrip('\r\n').split(DELIMITER)
    tag = fields[1] if len(fields) > 1 else ''
    if tag not in KIND_TAGS.values():
        return f"未知类型: {line}"
    try:
        decision = decode(line)
    except DecodeError:
        return f"未知类型: {line}"

    if not decision.is_project:
        tmux = tmux or TmuxController()
        out = [f"会话: {decision.logical_name}", "--- Windows ---"]
        out.extend(tmux.list_windows(decision.logical_name))
        out.append(f"--- 当前 pane 最后 {PREVIEW_LINES} 行 ---")
        out.append(tmux.capture_pane(decision.logical_name, PREVIEW_LINES).rstrip('\n'))
        return '\n'.join(out)

    path = decision.project_path
    out = [f"项目: {decision.logical_name}", f"路径: {path}", f"--- 目录内容（前 {PREVIEW_LINES} 项）---"]
    out.extend(list_directory(path))
    out.append(f"--- Git Log（最近 {PREVIEW_LINES} 条）---")
    out.extend(git_log(path))
    return '\n'.join(out)
