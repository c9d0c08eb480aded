"""
一次性完成通知，保证异步操作的结果只投递一次
"""

import asyncio
import logging
from typing import Any, Callable, Optional

# callback(error, result)
CompletionCallback = Callable[[Optional[BaseException], Any], None]


class Completion:
    """
    基于 asyncio.Future 的一次性完成原语

    resolve()/reject() 只有第一次调用生效，之后的调用被忽略。
    可选的回调在结果确定时被同步调用，恰好一次。
    """

    def __init__(
        self,
        callback: Optional[CompletionCallback] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.callback = callback
        self.logger = logger or logging.getLogger("hostile")
        self._future: asyncio.Future = asyncio.get_running_loop().create_future()

    @property
    def settled(self) -> bool:
        return self._future.done()

    def resolve(self, value: Any = None) -> bool:
        """设置成功结果，已完成时返回 False"""
        if self._future.done():
            self.logger.debug("完成通知已投递，忽略重复的结果")
            return False
        self._future.set_result(value)
        if self.callback is not None:
            self.callback(None, value)
        return True

    def reject(self, error: BaseException) -> bool:
        """设置失败结果，已完成时返回 False"""
        if self._future.done():
            self.logger.debug(f"完成通知已投递，忽略重复的错误: {error}")
            return False
        self._future.set_exception(error)
        if self.callback is not None:
            self.callback(error, None)
        return True

    def __await__(self):
        """等待结果；失败时抛出对应异常"""
        return self._future.__await__()
