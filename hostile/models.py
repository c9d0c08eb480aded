"""
hosts 文件的数据模型
"""

import ipaddress
from dataclasses import dataclass
from typing import Optional, Union


def address_family(address: str) -> int:
    """
    返回地址的协议族

    参数:
        address: IPv4 或 IPv6 地址文本

    返回:
        4 或 6；无法解析的地址返回 0
    """
    try:
        return ipaddress.ip_address(address).version
    except ValueError:
        return 0


@dataclass
class Entry:
    """
    代表 hosts 文件中的单个地址映射行

    属性:
        address: IP 地址
        host: 地址后、注释前的主机名文本（多个别名作为整体保存）
        comment: 行尾注释，可为空
    """

    address: str
    host: str
    comment: Optional[str] = None

    @property
    def family(self) -> int:
        return address_family(self.address)

    def to_hosts_line(self) -> str:
        """
        转换为 hosts 文件行格式

        格式: <地址> <主机名>[ # <注释>]

        返回:
            格式化的 hosts 文件行
        """
        line = f"{self.address} {self.host}"
        if self.comment:
            line += f" # {self.comment}"
        return line

    def __str__(self) -> str:
        return f"{self.host} -> {self.address}"


@dataclass(frozen=True)
class OpaqueLine:
    """
    原样保留的行：空行、纯注释行或无法识别的行

    属性:
        raw: 原始行文本（不含换行符）
    """

    raw: str

    @property
    def is_blank(self) -> bool:
        return not self.raw.strip()

    def to_hosts_line(self) -> str:
        return self.raw


Line = Union[Entry, OpaqueLine]
