from typing import Optional
from uuid import UUID

import bcrypt

from config import ApplicationConfig
from src.app.services.session_manager import SessionManager, tenant_lock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, Result, Return
from .dtos import RegisterResponse, build_user_profile
from .register_dto import RegisterCommand


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent) + tenant context
    - Output: Result[RegisterResponse] (structured response)

    Business Logic:
    1. Reject duplicate email (EMAIL_ALREADY_EXISTS)
    2. Require a tenant context (TENANT_REQUIRED)
    3. Hash password with bcrypt, before taking the tenant lock
    4. Under the tenant lock, refuse when active users already fill
       license_limit (LICENSE_LIMIT_REACHED)
    5. Create the user and open a real session for it (auto-login)
    6. Commit user and session atomically
    """

    def __init__(self, uow: UnitOfWork, session_manager: Optional[SessionManager] = None):
        self.uow = uow
        self.session_manager = session_manager or SessionManager(uow)

    async def execute(
        self,
        command: RegisterCommand,
        tenant_id: Optional[UUID],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated name, email, password, role
            tenant_id: Tenant the user joins (from the authenticated caller)

        Returns:
            Result[RegisterResponse] with credential and profile, or Error
        """
        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already exists"))

            if tenant_id is None:
                return Return.err(
                    Error("TENANT_REQUIRED", "A tenant is required to register users")
                )

            if await self.uow.tenants.get_by_id(tenant_id) is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            # Hash outside the lock: logins of the tenant wait on it
            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"),
                bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS),
            )

            async with tenant_lock(tenant_id):
                tenant = await self.uow.tenants.get_by_id_for_update(tenant_id)
                if tenant is None:
                    return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

                active_users = await self.uow.users.count_active_by_tenant_id(tenant_id)
                if active_users >= tenant.license_limit:
                    return Return.err(
                        Error(
                            "LICENSE_LIMIT_REACHED",
                            f"License limit reached. Your organization has "
                            f"{tenant.license_limit} licenses and all are assigned.",
                        )
                    )

                user = User(
                    tenant_id=tenant_id,
                    name=command.name,
                    email=command.email,
                    password_hash=password_hash.decode("utf-8"),
                    role=command.role,
                    is_active=True,
                )
                user = await self.uow.users.create(user)

                issued = await self.session_manager.create_session(
                    user, ip_address=ip_address, user_agent=user_agent
                )
                if issued.is_err():
                    return Return.err(issued.error)

                await self.uow.commit()

            session = issued.value
            return Return.ok(
                RegisterResponse(
                    access_token=session.access_token,
                    session_token=session.session_token,
                    session_id=str(session.session_id),
                    user=build_user_profile(user),
                )
            )
