"""
Hostile 主应用模块
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.markup import escape

from hostile import reader
from hostile.classifier import parse_entry
from hostile.config import Config
from hostile.hosts_manager import HostsFileManager
from hostile.models import Entry, address_family

LOOPBACK_ALIASES = {"local", "localhost"}
LOOPBACK_ADDRESS = "127.0.0.1"


class HostileError(Exception):
    """命令参数无效等可直接展示给用户的错误"""


def normalize_address(address: str) -> str:
    """
    把 local/localhost 规范为回环地址并校验地址

    异常:
        HostileError: 地址不是有效的 IPv4/IPv6 地址
    """
    if address in LOOPBACK_ALIASES:
        return LOOPBACK_ADDRESS
    if not address_family(address):
        raise HostileError("Invalid IP address")
    return address


def check_entry(entry: Entry) -> Entry:
    """
    确认写出的行能被原样读回，否则重复 set 会不断插入新行

    异常:
        HostileError: 主机名或注释含有无法解析的字符
    """
    line = entry.to_hosts_line()
    if "\n" in line or "\r" in line or parse_entry(line) != entry:
        raise HostileError(f"Invalid host name: {entry.host}")
    return entry


class Hostile:
    """
    主应用控制器，负责命令层面的操作

    - 初始化日志和 hosts 文件管理器
    - list/set/remove 单条操作
    - load/unload 从文件批量加载或移除
    - 彩色终端输出
    """

    def __init__(self, config: Config, console: Optional[Console] = None):
        """
        初始化应用

        参数:
            config: 应用配置
            console: 终端输出，默认写到标准输出

        异常:
            ValueError: 如果配置无效
        """
        self.config = config
        self.config.validate()

        self.logger = self._setup_logging()
        self.console = console or Console(highlight=False)
        self.hosts_manager = HostsFileManager(
            config.hosts_file_path,
            self.logger,
            eol=config.eol
        )

    def _setup_logging(self) -> logging.Logger:
        """
        配置日志系统

        返回:
            配置好的日志记录器实例
        """
        logger = logging.getLogger('hostile')
        logger.setLevel(self.config.log_level)

        # 避免重复的处理器
        if logger.handlers:
            return logger

        # 标准输出留给命令结果，日志写到标准错误
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(self.config.log_level)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)
        return logger

    def list(self, show_all: bool = False) -> int:
        """
        输出当前的映射行；show_all 为 True 时输出文件的每一行

        返回:
            输出的行数
        """
        doc = self.hosts_manager.read_document(preserve_formatting=show_all)
        for line in doc:
            if isinstance(line, Entry):
                text = f"{escape(line.address)} [green]{escape(line.host)}[/green]"
                if line.comment:
                    text += f" # [blue]{escape(line.comment)}[/blue]"
                self.console.print(text)
            else:
                self.console.print(line.raw, markup=False)
        return len(doc)

    def set(self, address: Optional[str], host: Optional[str], comment: Optional[str] = None) -> int:
        """
        设置一条映射

        返回:
            新增时返回 1，更新已有记录时返回 0
        """
        if not address or not host:
            raise HostileError("Invalid syntax: hostile set <ip> <host> [<comment>]")

        entry = check_entry(Entry(normalize_address(address), host, comment or None))
        matches = self.hosts_manager.set_entry(entry)

        if matches:
            self.console.print(f"[yellow]Updated: {escape(host)}[/yellow]")
            return 0
        self.console.print(f"[green]Added: {escape(host)}[/green]")
        return 1

    def remove(self, host: Optional[str]) -> int:
        """
        移除主机名的所有映射（不论地址）

        返回:
            移除的记录数
        """
        if not host:
            raise HostileError("Invalid syntax: hostile remove <host>")

        found = 0
        addresses = []
        for entry in self.hosts_manager.entries():
            if entry.host == host and entry.address not in addresses:
                addresses.append(entry.address)

        for address in addresses:
            found += self.hosts_manager.remove_entry(address, host)
            self.console.print(f"[green]Removed: {escape(host)}[/green]")

        if not found:
            self.console.print(f"[yellow]Not found: {escape(host)}[/yellow]")
        return found

    def load(self, file_path: Union[str, Path]) -> int:
        """从文件加载映射，返回新增的数量"""
        inserted = 0
        for entry in reader.read_document(file_path, False, self.logger).entries():
            inserted += self.set(entry.address, entry.host, entry.comment)
        self.console.print(f"\n[green]Added {inserted} hosts![/green]")
        return inserted

    def unload(self, file_path: Union[str, Path]) -> int:
        """移除文件中列出的所有主机名，返回移除的数量"""
        removed = 0
        for entry in reader.read_document(file_path, False, self.logger).entries():
            removed += self.remove(entry.host)
        self.console.print(f"[green]Removed {removed} hosts![/green]")
        return removed
