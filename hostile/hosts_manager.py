"""
Hosts 文件管理模块：读取、变更、写回
"""

import asyncio
import logging
import os
import threading
from pathlib import Path
from typing import List, Optional, Union

from hostile import mutator, reader, writer
from hostile.document import Document
from hostile.models import Entry


class HostsFileManager:
    """
    管理 hosts 文件的结构化编辑

    每次操作都重新读取文件构建 Document，变更后备份并写回。
    同一实例内的读-改-写由锁串行化：同步操作使用 threading.Lock，
    异步操作使用 asyncio.Lock；不提供跨进程的锁。
    """

    def __init__(
        self,
        hosts_path: Union[str, Path],
        logger: logging.Logger,
        eol: str = os.linesep
    ):
        """
        初始化 hosts 文件管理器

        参数:
            hosts_path: hosts 文件路径
            logger: 日志记录器实例
            eol: 写入时使用的换行符
        """
        self.hosts_path = Path(hosts_path)
        self.logger = logger
        self.eol = eol
        self.lock = threading.Lock()
        self._async_lock: Optional[asyncio.Lock] = None

    @property
    def async_lock(self) -> asyncio.Lock:
        # 在事件循环中首次使用时创建
        if self._async_lock is None:
            self._async_lock = asyncio.Lock()
        return self._async_lock

    def read_document(self, preserve_formatting: bool = True) -> Document:
        """读取 hosts 文件；preserve_formatting 为 False 时只保留映射行"""
        return reader.read_document(self.hosts_path, preserve_formatting, self.logger)

    async def aread_document(self, preserve_formatting: bool = True) -> Document:
        return await reader.read_document_async(
            self.hosts_path, preserve_formatting, logger=self.logger
        )

    def entries(self) -> List[Entry]:
        """返回文件中所有的映射行"""
        return self.read_document(preserve_formatting=False).entries()

    def write_document(self, doc: Document) -> bool:
        """备份并写回整个文档"""
        return writer.persist(self.hosts_path, doc, self.eol, self.logger)

    async def awrite_document(self, doc: Document) -> bool:
        return await writer.persist_async(
            self.hosts_path, doc, self.eol, logger=self.logger
        )

    def _apply_set(self, doc: Document, entry: Entry):
        before = writer.render(doc, self.eol)
        doc, matches = mutator.set_entry(doc, entry)
        changed = writer.render(doc, self.eol) != before
        if matches:
            self.logger.info(f"已更新 {matches} 条 {entry.host} 的记录")
        else:
            self.logger.info(f"已添加记录: {entry}")
        return doc, matches, changed

    def set_entry(self, entry: Entry) -> int:
        """
        设置主机映射并写回

        参数:
            entry: 地址已校验的新映射

        返回:
            0 表示新增；否则为被更新的行数

        异常:
            PermissionError: 如果没有写入 hosts 文件的权限
            OSError: 如果文件系统操作失败
        """
        with self.lock:
            doc, matches, changed = self._apply_set(self.read_document(), entry)
            if changed:
                self.write_document(doc)
            else:
                self.logger.debug(f"{entry.host} 已是最新，跳过写入")
            return matches

    async def aset_entry(self, entry: Entry) -> int:
        async with self.async_lock:
            doc, matches, changed = self._apply_set(await self.aread_document(), entry)
            if changed:
                await self.awrite_document(doc)
            else:
                self.logger.debug(f"{entry.host} 已是最新，跳过写入")
            return matches

    def remove_entry(self, address: str, host: str) -> int:
        """
        删除地址和主机名都精确匹配的映射

        返回:
            删除的行数；为 0 时不会创建备份也不会写入文件
        """
        with self.lock:
            doc, removed = mutator.remove_entry(self.read_document(), address, host)
            if removed:
                self.write_document(doc)
                self.logger.info(f"已移除 {removed} 条记录: {host} -> {address}")
            else:
                self.logger.debug(f"未找到记录: {host} -> {address}")
            return removed

    async def aremove_entry(self, address: str, host: str) -> int:
        async with self.async_lock:
            doc, removed = mutator.remove_entry(await self.aread_document(), address, host)
            if removed:
                await self.awrite_document(doc)
                self.logger.info(f"已移除 {removed} 条记录: {host} -> {address}")
            else:
                self.logger.debug(f"未找到记录: {host} -> {address}")
            return removed
