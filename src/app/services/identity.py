"""
Identity Service: 메모리 기반 인증 stub.

- 고정 데모 자격 증명 1쌍 또는 소셜 로그인 시뮬레이션
- 프로세스 단위 current_user (composition root에서 1회 생성)
- 상태 변경 시 리스너 통지
"""

import logging
from collections.abc import Callable

from src.core.ids import generate_user_id
from src.domain.errors import BuilderError, ErrorCodes
from src.domain.schemas import User

logger = logging.getLogger(__name__)

AuthListener = Callable[[User | None], None]

DEMO_USER = User(uid="uid-123", email="user@example.com", display_name="Demo User")
DEMO_PASSWORD = "password"


class InMemoryIdentityProvider:
    """
    메모리 인증 제공자.

    Usage:
        identity = InMemoryIdentityProvider()
        user = identity.sign_in_with_email_and_password("user@example.com", "password")
    """

    def __init__(
        self,
        demo_user: User = DEMO_USER,
        demo_password: str = DEMO_PASSWORD,
    ):
        self._demo_user = demo_user
        self._demo_password = demo_password
        self._users: dict[str, User] = {demo_user.uid: demo_user}
        self._current_user: User | None = None
        self._listeners: list[AuthListener] = []

    @property
    def current_user(self) -> User | None:
        return self._current_user

    def get_user(self, uid: str) -> User | None:
        return self._users.get(uid)

    def sign_in_with_email_and_password(self, email: str, password: str) -> User:
        """
        이메일/비밀번호 로그인.

        Raises:
            BuilderError: INVALID_CREDENTIALS (데모 자격 증명 불일치)
        """
        logger.info(f"Signing in with {email}")
        if email != self._demo_user.email or password != self._demo_password:
            raise BuilderError(ErrorCodes.INVALID_CREDENTIALS, email=email)

        self._set_current_user(self._demo_user)
        return self._demo_user

    def create_user_with_email_and_password(self, email: str, password: str) -> User:
        """신규 사용자 생성 후 바로 로그인. display_name = 이메일 local part."""
        logger.info(f"Creating user with {email}")
        user = User(
            uid=generate_user_id(),
            email=email,
            display_name=email.split("@")[0],
        )
        self._users[user.uid] = user
        self._set_current_user(user)
        return user

    def sign_in_with_google(self) -> User:
        """소셜 로그인 시뮬레이션: 데모 사용자로 로그인."""
        logger.info("Signing in with Google")
        self._set_current_user(self._demo_user)
        return self._demo_user

    def sign_out(self) -> None:
        logger.info("Signing out")
        self._set_current_user(None)

    def on_auth_state_changed(self, callback: AuthListener) -> Callable[[], None]:
        """
        인증 상태 리스너 등록.

        등록 즉시 현재 상태로 1회 호출됨.

        Returns:
            구독 해제 함수
        """
        self._listeners.append(callback)
        callback(self._current_user)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _set_current_user(self, user: User | None) -> None:
        self._current_user = user
        for listener in list(self._listeners):
            listener(user)
