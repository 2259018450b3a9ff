"""数据模型定义"""

from dataclasses import dataclass
from typing import Literal, Optional

WorkspaceKind = Literal['active', 'project']

# 展示行中的类型标签
KIND_TAGS = {
    'active': '[Active]',
    'project': '[Project]',
}


@dataclass(frozen=True)
class WorkspaceRecord:
    """工作区记录

    一个工作区要么是正在运行的 tmux 会话（active），要么是磁盘上的项目目录（project）。
    logical_name 是合并去重的唯一键。
    """
    logical_name: str
    kind: WorkspaceKind
    path: Optional[str] = None  # 仅 project 有值

    def __post_init__(self):
        if self.kind not in KIND_TAGS:
            raise ValueError(f"未知的工作区类型: {self.kind}")
        if self.kind == 'project' and not self.path:
            raise ValueError(f"项目 {self.logical_name!r} 缺少路径")
        if self.kind == 'active' and self.path is not None:
            raise ValueError(f"会话 {self.logical_name!r} 不应带路径")

    @property
    def is_active(self) -> bool:
        return self.kind == 'active'

    @property
    def tag(self) -> str:
        """展示用的类型标签"""
        return KIND_TAGS[self.kind]


# 合并前的候选记录，结构与 WorkspaceRecord 相同，但可能重名
RawCandidate = WorkspaceRecord


@dataclass(frozen=True)
class SelectionDecision:
    """用户在选择器中选中的结果"""
    logical_name: str
    is_project: bool
    project_path: Optional[str] = None

    def __post_init__(self):
        if self.is_project and not self.project_path:
            raise ValueError(f"项目 {self.logical_name!r} 缺少路径")
        if not self.is_project and self.project_path:
            raise ValueError(f"会话 {self.logical_name!r} 不应带路径")


@dataclass(frozen=True)
class WindowSpec:
    """新建会话时的单个 tmux window"""
    label: str
    command: Optional[str] = None  # None 表示只打开交互式 shell

    def to_dict(self) -> dict:
        return {
            'label': self.label,
            'command': self.command,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'WindowSpec':
        label = str(data['label']).strip()
        if not label:
            raise ValueError("window label 不能为空")
        command = data.get('command')
        return cls(
            label=label,
            command=str(command) if command else None,
        )


# 默认布局：编辑器 + 仓库状态 + 两个空 shell
DEFAULT_WINDOWS = (
    WindowSpec(label='nvim', command='nvim'),
    WindowSpec(label='lazygit', command='lazygit'),
    WindowSpec(label='shell1'),
    WindowSpec(label='shell2'),
)
