"""选择器 - 让用户从列表中选出一行

fzf 优先；未安装 fzf 时使用内置的 Textual 界面（tui.TextualPicker）。
"""

import shlex
import shutil
import subprocess
import sys
import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .config import SessionizerConfig
from .errors import EnvironmentCheckError, PickerError
from .selection import DELIMITER

logger = logging.getLogger(__name__)

# fzf 退出码：1 无匹配，130 用户取消
FZF_NO_MATCH = 1
FZF_CANCELLED = 130


class Picker(ABC):
    """选择器接口"""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def pick_one(self, lines: Sequence[str], initial_query: str = "") -> Optional[str]:
        """让用户选一行

        只有一行匹配 initial_query 时直接返回该行，没有匹配时返回 None。

        Returns:
            选中的完整行，取消时为 None
        """
        pass


def preview_command() -> str:
    """fzf --preview 使用的命令，{} 由 fzf 替换为当前行

    用 --preview=LINE 的形式，名称以 - 开头时 argparse 也不会当成选项。
    """
    return f"{shlex.quote(sys.executable)} -m tmux_sessionizer --preview={{}}"


class FzfPicker(Picker):
    """基于 fzf 的选择器"""

    def __init__(self, prompt: str = "Select Tmux Session/Project > ", preview: Optional[str] = None):
        self.prompt = prompt
        self.preview = preview

    @property
    def name(self) -> str:
        return "fzf"

    def build_command(self, initial_query: str = "") -> list[str]:
        cmd = [
            'fzf',
            '--prompt', self.prompt,
            '--delimiter', DELIMITER,
            '--with-nth', '1,2',
            '--tiebreak=index',
            '--query', initial_query,
            '--select-1',
            '--exit-0',
        ]
        if self.preview:
            cmd.extend(['--preview', self.preview])
        return cmd

    def pick_one(self, lines: Sequence[str], initial_query: str = "") -> Optional[str]:
        cmd = self.build_command(initial_query)
        logger.debug(f"[fzf] {len(lines)} 行, query={initial_query!r}")
        try:
            # fzf 自己在 /dev/tty 上绘制界面，这里只取 stdout
            result = subprocess.run(
                cmd,
                input='\n'.join(lines) + '\n',
                stdout=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError:
            raise EnvironmentCheckError("未找到 fzf，请安装 fzf 或在配置中设置 picker: textual")

        if result.returncode in (FZF_NO_MATCH, FZF_CANCELLED):
            logger.info(f"[fzf] 未选择 (退出码 {result.returncode})")
            return None
        if result.returncode != 0:
            raise PickerError(f"fzf 异常退出: {result.returncode}")

        selected = result.stdout.rstrip('\n')
        return selected or None


def check_fzf() -> tuple[bool, str]:
    """检查 fzf 是否可用"""
    try:
        result = subprocess.run(['fzf', '--version'], capture_output=True, text=True)
        if result.returncode == 0:
            return True, result.stdout.strip()
        return False, "fzf 命令执行失败"
    except FileNotFoundError:
        return False, "未找到 fzf，请安装: sudo apt install fzf"


def get_picker(config: SessionizerConfig) -> Picker:
    """按配置获取选择器

    Raises:
        EnvironmentCheckError: 指定的选择器不可用
    """
    kind = config.picker
    if kind == 'auto':
        kind = 'fzf' if shutil.which('fzf') else 'textual'
        logger.info(f"[选择器] 自动选择: {kind}")

    if kind == 'fzf':
        if not shutil.which('fzf'):
            raise EnvironmentCheckError("未找到 fzf，请安装 fzf 或在配置中设置 picker: textual")
        return FzfPicker(prompt=config.prompt, preview=preview_command())

    if kind == 'textual':
        from .tui import TextualPicker
        return TextualPicker(prompt=config.prompt)

    raise EnvironmentCheckError(f"不支持的选择器: {config.picker}")
