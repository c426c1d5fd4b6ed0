"""프로세스 로깅 설정 모듈.

Process logging configuration.
Configures the root logger once with a console handler; request/response
events go to Axiom through the middleware instead.
"""

import logging

_LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """루트 로거를 한 번만 구성합니다.

    Configure the root logger. Repeated calls (tests, app reloads) are no-ops
    once a handler is attached.

    Args:
        level: 로그 레벨 이름, 대소문자 무시 (Level name, case-insensitive)
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
