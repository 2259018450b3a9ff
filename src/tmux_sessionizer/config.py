"""配置管理模块

配置在启动时读取一次，得到不可变的 SessionizerConfig，显式传给各组件。
"""

import os
import yaml
import logging
from pathlib import Path
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from .models import DEFAULT_WINDOWS, WindowSpec

logger = logging.getLogger(__name__)

# 默认配置文件路径
CONFIG_DIR = Path.home() / '.config' / 'tmux-sessionizer'
DEFAULT_CONFIG_PATH = CONFIG_DIR / 'config.yaml'
LOG_DIR = CONFIG_DIR / 'logs'

# 项目目录覆盖变量
PROJECTS_DIR_ENV = 'PROJECTS_DIR'
DEFAULT_PROJECTS_DIR = Path.home() / 'Projects'

PICKER_CHOICES = ('auto', 'fzf', 'textual')


@dataclass(frozen=True)
class SessionizerConfig:
    """主配置

    Attributes:
        projects_dir: 扫描项目的根目录
        scan_depth: 扫描深度（相对 projects_dir）
        vcs_marker: 版本库标记目录名
        picker: 选择器（auto, fzf, textual）
        prompt: 选择器提示语
        windows: 新建会话时依次创建的 window
        active_window: 新建会话后选中的 window，空表示第一个
    """
    projects_dir: Path = DEFAULT_PROJECTS_DIR
    scan_depth: int = 3
    vcs_marker: str = '.git'
    picker: str = 'auto'
    prompt: str = 'Select Tmux Session/Project > '
    windows: tuple[WindowSpec, ...] = field(default=DEFAULT_WINDOWS)
    active_window: str = ''

    @property
    def initial_window(self) -> str:
        """新建会话后要选中的 window"""
        return self.active_window or self.windows[0].label


def _parse_windows(raw) -> tuple[WindowSpec, ...]:
    if not isinstance(raw, list) or not raw:
        raise ValueError("windows 必须是非空列表")
    windows = tuple(WindowSpec.from_dict(item) for item in raw)
    labels = [w.label for w in windows]
    if len(set(labels)) != len(labels):
        raise ValueError(f"window 名称重复: {labels}")
    return windows


def _from_dict(data: dict) -> SessionizerConfig:
    defaults = SessionizerConfig()

    scan_depth = int(data.get('scan_depth', defaults.scan_depth))
    if scan_depth < 1:
        raise ValueError(f"scan_depth 必须 >= 1: {scan_depth}")

    picker = data.get('picker', defaults.picker)
    if picker not in PICKER_CHOICES:
        raise ValueError(f"不支持的 picker: {picker}")

    windows = defaults.windows
    if 'windows' in data:
        windows = _parse_windows(data['windows'])

    active_window = data.get('active_window') or ''
    if active_window and active_window not in {w.label for w in windows}:
        raise ValueError(f"active_window 不在 windows 中: {active_window}")

    projects_dir = data.get('projects_dir')
    return SessionizerConfig(
        projects_dir=Path(projects_dir).expanduser() if projects_dir else defaults.projects_dir,
        scan_depth=scan_depth,
        vcs_marker=data.get('vcs_marker', defaults.vcs_marker),
        picker=picker,
        prompt=data.get('prompt', defaults.prompt),
        windows=windows,
        active_window=active_window,
    )


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SessionizerConfig:
    """加载配置文件

    Args:
        config_path: 配置文件路径，默认 ~/.config/tmux-sessionizer/config.yaml
        environ: 环境变量，默认 os.environ（PROJECTS_DIR 优先于配置文件）

    Returns:
        SessionizerConfig 对象
    """
    path = config_path or DEFAULT_CONFIG_PATH
    env = os.environ if environ is None else environ
    config = SessionizerConfig()

    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError("顶层必须是映射")
            config = _from_dict(data)
            logger.info(f"[配置] 已加载: {path}")
        except (OSError, yaml.YAMLError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"[配置] 加载失败，使用默认值: {e}")
    else:
        logger.info(f"[配置] 文件不存在，使用默认值: {path}")

    override = env.get(PROJECTS_DIR_ENV)
    if override:
        config = replace(config, projects_dir=Path(override).expanduser())
        logger.info(f"[配置] {PROJECTS_DIR_ENV} 覆盖项目目录: {config.projects_dir}")

    return config


def save_default_config(config_path: Optional[Path] = None) -> Path:
    """保存默认配置文件（用于生成示例）

    Args:
        config_path: 配置文件路径

    Returns:
        写入的路径
    """
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    windows_yaml = yaml.dump(
        {'windows': [w.to_dict() for w in DEFAULT_WINDOWS]},
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )

    default_yaml = f"""# tmux-sessionizer 配置文件

# 项目根目录（环境变量 PROJECTS_DIR 优先）
projects_dir: ~/Projects

# 扫描深度
scan_depth: 3

# 版本库标记目录
vcs_marker: .git

# 选择器：auto（有 fzf 用 fzf，否则内置界面）, fzf, textual
picker: auto

# 新建会话时依次创建的 window（command 为空表示只开 shell）
{windows_yaml}
# 新建会话后选中的 window（留空为第一个）
active_window: nvim
"""

    with open(path, 'w', encoding='utf-8') as f:
        f.write(default_yaml)

    logger.info(f"[配置] 已生成默认配置: {path}")
    return path
