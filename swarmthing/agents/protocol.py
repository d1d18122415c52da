"""Parsing of the agent's reply text.

Two directives are recognised:

- tool creation: a fenced ```python block containing a
  ``# filename: <name>`` comment line
- tool call: ``[TOOL: name(args)]``
"""

from __future__ import annotations

import ast
import re
from dataclasses import dataclass

_CODE_BLOCK = re.compile(r"```(?:python|py)[^\n]*\n(.*?)```", re.DOTALL)
_FILENAME = re.compile(
    r"^\s*#\s*filename:\s*([A-Za-z_][A-Za-z0-9_]*)(?:\.py)?\s*$", re.MULTILINE
)
_TOOL_CALL = re.compile(
    r"\[TOOL:\s*([A-Za-z_][A-Za-z0-9_]*)\s*\((.*?)\)\s*\]", re.DOTALL
)


@dataclass(frozen=True)
class ToolBlock:
    name: str
    code: str


@dataclass(frozen=True)
class ToolCall:
    name: str
    args: list[str]


def extract_tool_blocks(text: str) -> list[ToolBlock]:
    blocks = []
    for match in _CODE_BLOCK.finditer(text):
        code = match.group(1)
        name = _FILENAME.search(code)
        if name:
            blocks.append(ToolBlock(name=name.group(1), code=code))
    return blocks


def split_args(raw: str) -> list[str]:
    """Argument text to a list of strings.

    Literal argument lists (``11``, ``"a, b"``, ``1, 2``) are split the way
    Python would; anything else is one bare string argument.
    """
    raw = raw.strip()
    if not raw:
        return []
    try:
        call = ast.parse(f"_({raw})", mode="eval").body
    except SyntaxError:
        return [raw]
    if not isinstance(call, ast.Call) or call.keywords:
        return [raw]
    args = []
    for node in call.args:
        try:
            value = ast.literal_eval(node)
        except (ValueError, TypeError):
            return [raw]
        args.append(value if isinstance(value, str) else str(value))
    return args


def extract_tool_calls(text: str) -> list[ToolCall]:
    return [
        ToolCall(name=m.group(1), args=split_args(m.group(2)))
        for m in _TOOL_CALL.finditer(text)
    ]
