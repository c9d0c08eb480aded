"""
读取 hosts 文件并构建 Document，支持阻塞和流式异步两种方式
"""

import asyncio
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from hostile.classifier import LineSplitter, classify, split_lines
from hostile.completion import Completion, CompletionCallback
from hostile.document import Document

CHUNK_SIZE = 64 * 1024

# 非 UTF-8 字节以代理字符保存，写回时还原为原始字节
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def _classify_into(doc: Document, raw_lines: Iterable[str], preserve_formatting: bool) -> None:
    for raw_line in raw_lines:
        line = classify(raw_line, preserve_formatting)
        if line is not None:
            doc.lines.append(line)


def _log_read_error(logger: logging.Logger, path: Path, error: Exception) -> None:
    if isinstance(error, PermissionError):
        logger.error(f"读取 hosts 文件权限被拒绝: {path}")
    else:
        logger.error(f"读取 hosts 文件时出错: {error}")


def read_document(
    path: Union[str, Path],
    preserve_formatting: bool = True,
    logger: logging.Logger = logging.getLogger("hostile"),
) -> Document:
    """
    一次性读取文件并分类所有行

    参数:
        path: hosts 文件路径
        preserve_formatting: 是否保留注释、空行等非映射行
        logger: 日志记录器实例

    返回:
        新构建的 Document

    异常:
        FileNotFoundError / PermissionError / OSError: 读取失败时
    """
    path = Path(path)
    try:
        with open(path, "r", encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
            text = f.read()
    except OSError as e:
        _log_read_error(logger, path, e)
        raise

    doc = Document()
    _classify_into(doc, split_lines(text), preserve_formatting)
    logger.debug(f"已读取 {path}: {len(doc)} 行, {len(doc.entries())} 条映射")
    return doc


async def read_document_async(
    path: Union[str, Path],
    preserve_formatting: bool = True,
    callback: Optional[CompletionCallback] = None,
    logger: logging.Logger = logging.getLogger("hostile"),
) -> Document:
    """
    分块流式读取文件，逐行分类

    结果与 read_document() 完全一致。完成通知（返回值和可选的
    callback(error, document)）只投递一次。
    """
    path = Path(path)
    done = Completion(callback, logger)
    doc = Document()
    splitter = LineSplitter()

    try:
        handle = await asyncio.to_thread(
            open, path, "r", encoding=ENCODING, errors=ENCODING_ERRORS, newline=""
        )
        try:
            while True:
                chunk = await asyncio.to_thread(handle.read, CHUNK_SIZE)
                if not chunk:
                    break
                _classify_into(doc, splitter.feed(chunk), preserve_formatting)
            _classify_into(doc, [splitter.close()], preserve_formatting)
        finally:
            await asyncio.to_thread(handle.close)
    except Exception as e:
        _log_read_error(logger, path, e)
        done.reject(e)
    else:
        logger.debug(f"已流式读取 {path}: {len(doc)} 行, {len(doc.entries())} 条映射")
        done.resolve(doc)

    return await done
