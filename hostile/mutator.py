"""
对 Document 执行 set/remove 变更
"""

from typing import Tuple

from hostile.document import Document
from hostile.models import Entry, address_family


def set_entry(doc: Document, new_entry: Entry) -> Tuple[Document, int]:
    """
    设置主机映射

    所有主机名相同且地址族与新地址相同的行都会就地更新地址，
    注释和主机名保持不变。没有匹配时按“末尾空行之前”规则插入新行。

    参数:
        doc: 要修改的文档（就地修改）
        new_entry: 新的映射，地址必须已经过校验

    返回:
        (文档, 匹配数)；插入新行时匹配数为 0，否则为更新的行数
    """
    family = address_family(new_entry.address)
    matches = 0

    for line in doc.entries():
        if line.host == new_entry.host and line.family == family:
            line.address = new_entry.address
            matches += 1

    if not matches:
        doc.insert_before_trailing_blank(
            Entry(new_entry.address, new_entry.host, new_entry.comment)
        )

    return doc, matches


def remove_entry(doc: Document, address: str, host: str) -> Tuple[Document, int]:
    """
    删除地址和主机名都精确相等的映射行

    参数:
        doc: 要修改的文档（就地修改）
        address: 精确匹配的地址文本
        host: 精确匹配的主机名

    返回:
        (文档, 删除数)；删除数为 0 时文档未被改变，调用方不应写回
    """
    removed = doc.remove_where(
        lambda line: isinstance(line, Entry)
        and line.address == address
        and line.host == host
    )
    return doc, removed
