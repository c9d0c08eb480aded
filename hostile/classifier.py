"""
行分类模块：把 hosts 文件的单行文本解析为 Entry 或 OpaqueLine

行语法:
    line    := WS* ADDRESS WS+ HOST [ "# " COMMENT ]
    ADDRESS := [0-9A-Fa-f.:]+ 且能解析为 IPv4/IPv6 地址
    HOST    := [A-Za-z0-9_.-] 与空白组成，至少一个非空白字符
    COMMENT := "# " 之后的剩余文本
"""

import string
from typing import List, Optional

from hostile.models import Entry, Line, OpaqueLine, address_family

WHITESPACE = frozenset(" \t\f\v")
ADDRESS_CHARS = frozenset(string.hexdigits + ".:")
HOST_CHARS = frozenset(string.ascii_letters + string.digits + "_.-") | WHITESPACE
COMMENT_MARKER = "# "


class LineTokenizer:
    """在单行文本上按字符集合逐段取词的简单游标"""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def take_while(self, chars: frozenset) -> str:
        """取出从当前位置开始、全部属于 chars 的最长片段"""
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in chars:
            self.pos += 1
        return self.text[start:self.pos]

    def skip_whitespace(self) -> int:
        return len(self.take_while(WHITESPACE))

    def take_marker(self, marker: str) -> bool:
        if self.text.startswith(marker, self.pos):
            self.pos += len(marker)
            return True
        return False

    def rest(self) -> str:
        remainder = self.text[self.pos:]
        self.pos = len(self.text)
        return remainder


def parse_entry(raw_line: str) -> Optional[Entry]:
    """
    按行语法解析地址映射行

    参数:
        raw_line: 不含换行符的原始行

    返回:
        匹配时返回 Entry，否则返回 None
    """
    tokens = LineTokenizer(raw_line)
    tokens.skip_whitespace()

    address = tokens.take_while(ADDRESS_CHARS)
    if not address or not address_family(address):
        return None
    if not tokens.skip_whitespace():
        return None

    host = tokens.take_while(HOST_CHARS).strip()
    if not host:
        return None

    comment = None
    if not tokens.at_end():
        if not tokens.take_marker(COMMENT_MARKER):
            return None
        comment = tokens.rest()

    return Entry(address=address, host=host, comment=comment)


def classify(raw_line: str, preserve_formatting: bool = True) -> Optional[Line]:
    """
    对单行分类，从不抛出异常

    参数:
        raw_line: 不含换行符的原始行
        preserve_formatting: 为 True 时非映射行保留为 OpaqueLine，
            否则直接丢弃

    返回:
        Entry、OpaqueLine，或在丢弃时返回 None
    """
    entry = parse_entry(raw_line)
    if entry is not None:
        return entry
    if preserve_formatting:
        return OpaqueLine(raw_line)
    return None


class LineSplitter:
    """
    增量换行切分器，按 \\n 或 \\r\\n 切分分块到达的文本

    close() 返回最后一段（可能为空），与一次性切分的结果完全一致。
    """

    def __init__(self):
        self._buffer = ""

    def feed(self, chunk: str) -> List[str]:
        self._buffer += chunk
        *complete, self._buffer = self._buffer.split("\n")
        return [line[:-1] if line.endswith("\r") else line for line in complete]

    def close(self) -> str:
        last, self._buffer = self._buffer, ""
        return last


def split_lines(text: str) -> List[str]:
    """把整段文本切分为行；以换行结尾的文本会得到末尾的空行"""
    splitter = LineSplitter()
    lines = splitter.feed(text)
    lines.append(splitter.close())
    return lines
