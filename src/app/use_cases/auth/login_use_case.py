"""
Login Use Case

Authenticates a user and opens their single active session.
"""

from typing import Optional

import bcrypt

from config import ApplicationConfig
from src.app.services.session_manager import SessionManager, tenant_lock
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import LoginResponse, build_user_profile


class LoginUseCase:
    """
    Use case for user login and credential issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password return the same INVALID_CREDENTIALS
    - ACCOUNT_DEACTIVATED is only reported once the password is known valid
    - ACTIVE_SESSION_EXISTS and LICENSE_LIMIT_REACHED propagate unchanged
    - Session creation and commit run under the tenant lock
    """

    def __init__(self, uow: UnitOfWork, session_manager: Optional[SessionManager] = None):
        self.uow = uow
        self.session_manager = session_manager or SessionManager(uow)

    async def execute(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            ip_address: Client IP (informational)
            user_agent: Client User-Agent (informational)

        Returns:
            Result with LoginResponse containing credential, session token and
            profile, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            # Always perform a hash check even if user not found
            if user is None:
                bcrypt.checkpw(
                    b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
                )
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            try:
                password_valid = bcrypt.checkpw(
                    password.encode(), user.password_hash.encode()
                )
            except ValueError:
                # Stored hash is malformed
                password_valid = False

            if not password_valid:
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not user.is_active:
                return Return.err(
                    Error("ACCOUNT_DEACTIVATED", "User account is deactivated")
                )

            async with tenant_lock(user.tenant_id):
                issued = await self.session_manager.create_session(
                    user, ip_address=ip_address, user_agent=user_agent
                )
                if issued.is_err():
                    return Return.err(issued.error)

                await self.uow.commit()

            session = issued.value
            return Return.ok(
                LoginResponse(
                    access_token=session.access_token,
                    session_token=session.session_token,
                    session_id=str(session.session_id),
                    expires_at=session.expires_at,
                    user=build_user_profile(user),
                )
            )
