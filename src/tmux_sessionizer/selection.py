"""选择器展示行的编码与解码

展示行格式（制表符分隔）：

    <name>\\t<tag>\\t<path>

- 会话：``alpha\\t[Active]\\t``
- 项目：``alpha\\t[Project]\\t/home/u/Projects/alpha``

选择器原样返回整行，decode 据此还原用户的选择。
"""

from .errors import DecodeError
from .models import SelectionDecision, WorkspaceRecord

DELIMITER = '\t'
FIELD_COUNT = 3


def has_reserved_chars(value: str) -> bool:
    """是否包含展示行保留字符（分隔符或换行）"""
    return DELIMITER in value or '\n' in value or '\r' in value


def encode_record(record: WorkspaceRecord) -> str:
    """把记录编码成选择器的一行

    Raises:
        ValueError: 名称或路径包含保留字符
    """
    path = record.path or ''
    for value in (record.logical_name, path):
        if has_reserved_chars(value):
            raise ValueError(f"包含保留字符: {value!r}")
    return DELIMITER.join((record.logical_name, record.tag, path))


def decode(selection_line: str) -> SelectionDecision:
    """把选择器返回的一行还原成 SelectionDecision

    路径字段非空即视为项目。

    Raises:
        DecodeError: 名称为空或字段数不对
    """
    line = selection_line.rstrip('\r\n')
    fields = line.split(DELIMITER)
    if len(fields) > FIELD_COUNT:
        raise DecodeError(f"无法解析选择结果（字段过多）: {line!r}")
    fields += [''] * (FIELD_COUNT - len(fields))
    name, _tag, path = fields

    if not name.strip():
        raise DecodeError(f"无法从选择结果中确定会话/项目名: {line!r}")

    if path:
        return SelectionDecision(logical_name=name, is_project=True, project_path=path)
    return SelectionDecision(logical_name=name, is_project=False)
