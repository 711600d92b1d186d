"""
瞬时故障重试策略

只包裹网络调用本身（不包括提示词构建和响应解析）。
仅 429（限流）与 503（服务不可用）会被重试，按指数退避等待：
默认首次 2 秒，之后每次翻倍（2s, 4s, 8s），首次调用之外最多重试 3 次。
重试用尽后原样抛出最后一次捕获的异常，由调用方转换为失败结果。
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from sketchify.core.log_messages import log_messages
from sketchify.core.log_utils import get_logger
from sketchify.core.sketch.exceptions import NetworkTransportError
from sketchify.core.sketch.models import FailureKind

logger = get_logger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[Any]]

RATE_LIMITED_STATUS = 429
SERVICE_UNAVAILABLE_STATUS = 503


@dataclass(frozen=True)
class RetryPolicy:
    """
    重试参数

    Attributes:
        max_retries: 首次调用之外的最大重试次数
        initial_delay: 第一次重试前的等待秒数
        backoff_factor: 每次重试等待时间的倍数
    """
    max_retries: int = 3
    initial_delay: float = 2.0
    backoff_factor: float = 2.0

    def delay_for(self, retry_index: int) -> float:
        """第 retry_index 次重试（从 0 开始）前的等待秒数"""
        return self.initial_delay * (self.backoff_factor ** retry_index)


def _status_of(error: BaseException) -> Optional[int]:
    for attr in ("status_code", "status", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def classify_transient(error: BaseException) -> Optional[FailureKind]:
    """
    判断异常是否属于可重试的瞬时故障

    Returns:
        FailureKind.RATE_LIMITED / FailureKind.SERVICE_UNAVAILABLE，其他情况返回 None
    """
    if isinstance(error, NetworkTransportError):
        return None

    status = _status_of(error)
    if status is None:
        # 部分 SDK 只在消息中携带状态码
        text = str(error)
        if str(RATE_LIMITED_STATUS) in text:
            return FailureKind.RATE_LIMITED
        if str(SERVICE_UNAVAILABLE_STATUS) in text:
            return FailureKind.SERVICE_UNAVAILABLE
        return None

    if status == RATE_LIMITED_STATUS:
        return FailureKind.RATE_LIMITED
    if status == SERVICE_UNAVAILABLE_STATUS:
        return FailureKind.SERVICE_UNAVAILABLE
    return None


async def call_with_retry(
    func: Callable[[], Awaitable[T]],
    policy: Optional[RetryPolicy] = None,
    sleep: SleepFunc = asyncio.sleep
) -> T:
    """
    执行异步调用，遇到瞬时故障时按指数退避重试

    Args:
        func: 无参异步调用（每次重试都会重新调用）
        policy: 重试参数，默认 3 次重试、2 秒起步、翻倍
        sleep: 等待函数，测试中可替换为可控时钟

    Returns:
        func 的返回值

    Raises:
        func 抛出的不可重试异常，或重试用尽后的最后一个异常
    """
    policy = policy or RetryPolicy()
    retry_index = 0

    while True:
        try:
            return await func()
        except Exception as e:
            kind = classify_transient(e)
            if kind is None:
                raise

            retries_left = policy.max_retries - retry_index
            if retries_left <= 0:
                logger.warning(
                    log_messages.MODEL_RETRY_EXHAUSTED,
                    operation="retry_exhausted",
                    failure_kind=kind.value,
                    attempts=retry_index + 1
                )
                raise

            delay = policy.delay_for(retry_index)
            logger.warning(
                log_messages.MODEL_RETRY_SCHEDULED,
                operation="retry_scheduled",
                status=_status_of(e) or kind.value,
                delay=delay,
                retries_left=retries_left
            )
            await sleep(delay)
            retry_index += 1
