# 재시도 로직 유틸리티
# 주니어 개발자님께: 앱을 띄울 때 MongoDB가 아직 준비되지 않았을 수 있습니다
# (docker-compose로 동시에 올리는 경우 등). 시작 시점의 연결 확인만 몇 번 재시도합니다.
# 요청 처리 중의 DB 호출은 재시도하지 않습니다.

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)
import logging
from typing import Type, Tuple

from pymongo.errors import ConnectionFailure

logger = logging.getLogger(__name__)


def create_db_retry_decorator(
    max_attempts: int = 3,
    initial_wait: float = 1.0,
    max_wait: float = 10.0,
    exceptions: Tuple[Type[Exception], ...] = (ConnectionFailure,)
):
    """
    DB 연결 확인용 재시도 데코레이터를 생성하는 팩토리 함수입니다.

    1. max_attempts: 최대 시도 횟수 (처음 1번 포함)
    2. initial_wait: 첫 재시도 전 대기 시간 (초)
    3. max_wait: 최대 대기 시간 (초)
    4. exceptions: 재시도할 예외 타입

    마지막 시도까지 실패하면 원래 예외를 그대로 다시 던집니다 (reraise=True).
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=2, min=initial_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
