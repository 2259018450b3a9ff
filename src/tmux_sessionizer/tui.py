"""内置 Textual 选择器

在没有 fzf 的环境下提供同样的选择契约：模糊过滤、唯一匹配直接返回、
无匹配返回 None、Esc 取消。
"""

import logging
from typing import Optional, Sequence

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.fuzzy import Matcher
from textual.widgets import Input, Label, ListItem, ListView, Static

from .picker import Picker
from .selection import DELIMITER

logger = logging.getLogger(__name__)


def display_text(line: str) -> str:
    """用于匹配和显示的部分：名称 + 类型标签"""
    fields = line.split(DELIMITER)
    return ' '.join(f for f in fields[:2] if f)


def _matchers(query: str) -> list[Matcher]:
    return [Matcher(term) for term in query.split()]


def fuzzy_match(query: str, text: str) -> bool:
    """子序列匹配（忽略大小写），空格分隔的每个词都要匹配"""
    return all(m.match(text) > 0 for m in _matchers(query))


def filter_lines(lines: Sequence[str], query: str) -> list[str]:
    """保持原顺序过滤"""
    matchers = _matchers(query)
    return [
        line for line in lines
        if all(m.match(display_text(line)) > 0 for m in matchers)
    ]


class RecordItem(ListItem):
    """列表项，保存完整的原始行"""

    def __init__(self, line: str):
        super().__init__()
        self.line = line

    def compose(self) -> ComposeResult:
        fields = self.line.split(DELIMITER)
        name = fields[0]
        tag = fields[1] if len(fields) > 1 else ''
        # 名称可能包含 [ ]，不走 markup
        icon = ("● ", "green") if tag == "[Active]" else ("○ ", "dim")
        yield Static(Text.assemble(icon, name, (f" {tag}", "dim")))


class PickerApp(App):
    """单选列表，返回选中的原始行"""

    CSS = """
    Screen { background: $surface; }
    #main-container { width: 100%; height: 100%; padding: 0 1; }
    #prompt { text-style: bold; color: $warning; }
    Input { margin: 0 0 1 0; height: 3; }
    ListView { height: 1fr; margin: 0; padding: 0; background: transparent; }
    ListItem { padding: 0; height: 1; }
    ListItem > Static { padding: 0 1; }
    ListItem.-highlight { background: $primary 30%; }
    #status-line { dock: bottom; height: 1; background: $surface-darken-1; color: $text-muted; padding: 0 1; }
    """

    BINDINGS = [
        Binding("escape", "cancel", "取消"),
        Binding("ctrl+c", "cancel", "取消", show=False),
        Binding("up", "move_up", "上移", show=False),
        Binding("down", "move_down", "下移", show=False),
        Binding("ctrl+p", "move_up", show=False),
        Binding("ctrl+n", "move_down", show=False),
    ]

    def __init__(self, lines: Sequence[str], initial_query: str = "", prompt: str = ""):
        super().__init__()
        self.lines = list(lines)
        self.initial_query = initial_query
        self.prompt = prompt
        self.matches: list[str] = filter_lines(self.lines, initial_query)

    def compose(self) -> ComposeResult:
        with Vertical(id="main-container"):
            yield Label(self.prompt, id="prompt")
            yield Input(value=self.initial_query, id="query")
            yield ListView(id="records")
        yield Static("", id="status-line")

    def on_mount(self) -> None:
        self._refresh_list()
        self.query_one("#query", Input).focus()

    def _refresh_list(self) -> None:
        records = self.query_one("#records", ListView)
        records.clear()
        for line in self.matches:
            records.append(RecordItem(line))
        if self.matches:
            records.index = 0
        self.query_one("#status-line", Static).update(
            f"{len(self.matches)}/{len(self.lines)}  Enter:选择 Esc:取消"
        )

    @on(Input.Changed, "#query")
    def on_query_changed(self, event: Input.Changed) -> None:
        self.matches = filter_lines(self.lines, event.value)
        self._refresh_list()

    @on(Input.Submitted, "#query")
    def on_query_submitted(self, event: Input.Submitted) -> None:
        self._choose_highlighted()

    @on(ListView.Selected, "#records")
    def on_record_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, RecordItem):
            self.exit(event.item.line)

    def _choose_highlighted(self) -> None:
        item = self.query_one("#records", ListView).highlighted_child
        if isinstance(item, RecordItem):
            self.exit(item.line)

    def action_move_up(self) -> None:
        self.query_one("#records", ListView).action_cursor_up()

    def action_move_down(self) -> None:
        self.query_one("#records", ListView).action_cursor_down()

    def action_cancel(self) -> None:
        self.exit(None)


class TextualPicker(Picker):
    """基于 Textual 的选择器"""

    def __init__(self, prompt: str = ""):
        self.prompt = prompt

    @property
    def name(self) -> str:
        return "textual"

    def pick_one(self, lines: Sequence[str], initial_query: str = "") -> Optional[str]:
        matches = filter_lines(lines, initial_query)
        if not matches:
            logger.info(f"[选择器] 没有匹配 {initial_query!r} 的记录")
            return None
        if len(matches) == 1:
            logger.info(f"[选择器] 唯一匹配，直接选择: {display_text(matches[0])}")
            return matches[0]

        app = PickerApp(lines, initial_query=initial_query, prompt=self.prompt)
        return app.run()
