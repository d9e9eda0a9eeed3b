"""
Session Manager

Owns the lifecycle of UserSession rows and the single-session and
license-limit policies. Runs inside the caller's unit of work; callers
decide when to commit.
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel

from config import ApplicationConfig
from src.api.utils.jwt import generate_jwt, verify_jwt
from src.app.services.license_counter import LicenseCounter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import User, UserRole, UserSession
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

_tenant_locks: Dict[Optional[UUID], asyncio.Lock] = defaultdict(asyncio.Lock)


def tenant_lock(tenant_id: Optional[UUID]) -> asyncio.Lock:
    """
    In-process lock serializing license checks and session writes of one tenant.

    Hold it from the check until after commit, otherwise two logins can both
    observe a free slot.
    """
    return _tenant_locks[tenant_id]


class IssuedSession(BaseModel):
    """A freshly created session and the credential naming it"""

    session_id: UUID
    session_token: str
    access_token: str
    expires_at: datetime
    license_used: int


class SessionIdentity(BaseModel):
    """Authenticated identity resolved from a bearer credential"""

    user_id: UUID
    email: str
    role: str
    tenant_id: Optional[UUID]
    session_id: UUID


class SweepReport(BaseModel):
    """Outcome of an expiry sweep"""

    sessions_deactivated: int
    tenants_recounted: int


class SessionManager:
    """
    Session lifecycle: NONE -> ACTIVE -> (EXPIRED | DEACTIVATED).

    Business Rules:
    - A user holds at most one active session
    - A login is refused once active sessions reach the tenant's license_limit
    - Expired sessions are deactivated the first time they are looked at
    - Deactivation is monotonic and idempotent; missing sessions are a no-op
    - Every add/remove of an active session recounts the affected tenant
    """

    def __init__(self, uow: UnitOfWork, license_counter: Optional[LicenseCounter] = None):
        self.uow = uow
        self.license_counter = license_counter or LicenseCounter(uow)

    async def create_session(
        self,
        user: User,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[IssuedSession]:
        """
        Open a session for an authenticated user and sign its credential.

        The caller must hold tenant_lock(user.tenant_id) until commit.

        Args:
            user: User whose credentials were already verified
            ip_address: Client IP (informational)
            user_agent: Client User-Agent (informational)

        Returns:
            Result with IssuedSession, or Error ACTIVE_SESSION_EXISTS /
            LICENSE_LIMIT_REACHED / TENANT_NOT_FOUND
        """
        now = utcnow()

        active_sessions = await self.uow.sessions.get_active_by_user_id(user.id)
        if any(s.expires_at >= now for s in active_sessions):
            return Return.err(
                Error(
                    "ACTIVE_SESSION_EXISTS",
                    "User already has an active session. "
                    "Please logout from other devices first.",
                )
            )

        # Only expired leftovers remain: retire them before counting
        if active_sessions:
            stale_ids = [s.id for s in active_sessions]
            await self.uow.sessions.deactivate_expired(stale_ids, now)
            await self.uow.users.clear_current_sessions(stale_ids)

        if user.tenant_id is None:
            return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

        tenant = await self.uow.tenants.get_by_id_for_update(user.tenant_id)
        if tenant is None:
            return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

        used = await self.license_counter.recount(tenant.id)
        if used >= tenant.license_limit:
            logger.info(
                "Login refused for user %s: tenant %s at license limit %s",
                user.id,
                tenant.id,
                tenant.license_limit,
            )
            return Return.err(
                Error(
                    "LICENSE_LIMIT_REACHED",
                    f"License limit reached. Your organization has "
                    f"{tenant.license_limit} licenses and all are currently in use.",
                )
            )

        session = UserSession(
            user_id=user.id,
            ip_address=ip_address,
            user_agent=user_agent,
            is_active=True,
            last_activity=now,
            expires_at=now + timedelta(hours=ApplicationConfig.SESSION_TTL_HOURS),
        )
        session = await self.uow.sessions.create(session)
        await self.uow.users.set_current_session(user.id, session.id)
        used = await self.license_counter.recount(tenant.id)

        access_token = generate_jwt(
            {
                "sub": str(user.id),
                "email": user.email,
                "role": UserRole(user.role).value,
                "tenant_id": str(tenant.id),
                "session_id": str(session.id),
            }
        )

        logger.info(
            "Session %s opened for user %s (tenant %s, %s/%s licenses)",
            session.id,
            user.id,
            tenant.id,
            used,
            tenant.license_limit,
        )
        return Return.ok(
            IssuedSession(
                session_id=session.id,
                session_token=session.session_token,
                access_token=access_token,
                expires_at=session.expires_at,
                license_used=used,
            )
        )

    async def validate_by_token(self, session_token: str) -> Optional[User]:
        """
        Resolve an opaque session token to its owner.

        Returns:
            The owning User, or None when unknown, inactive or expired
        """
        found = await self.uow.sessions.get_active_by_token(session_token)
        if found is None:
            return None

        session, user = found
        now = utcnow()
        if session.expires_at < now:
            await self.deactivate(session.id)
            return None

        await self.uow.sessions.touch(session.id, now)
        return user

    async def validate_by_credential(self, token: str) -> Result[SessionIdentity]:
        """
        Resolve a bearer credential to an identity on the request path.

        Returns:
            Result with SessionIdentity, or Error INVALID_TOKEN /
            SESSION_INACTIVE / SESSION_EXPIRED
        """
        verified = verify_jwt(token)
        if verified.is_err():
            return Return.err(Error("INVALID_TOKEN", verified.error.message))

        claims = verified.value
        try:
            session_id = UUID(str(claims.get("session_id")))
        except ValueError:
            return Return.err(Error("INVALID_TOKEN", "Session ID not found in token"))

        found = await self.uow.sessions.get_active_by_id(session_id)
        if found is None:
            return Return.err(Error("SESSION_INACTIVE", "Session is no longer active"))

        session, user = found
        if str(user.id) != claims.get("sub"):
            return Return.err(Error("INVALID_TOKEN", "Token subject does not match session"))

        now = utcnow()
        if session.expires_at < now:
            await self.deactivate(session.id)
            return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

        await self.uow.sessions.touch(session.id, now)
        return Return.ok(
            SessionIdentity(
                user_id=user.id,
                email=user.email,
                role=UserRole(user.role).value,
                tenant_id=user.tenant_id,
                session_id=session.id,
            )
        )

    async def deactivate(self, session_id: UUID) -> bool:
        """
        Deactivate one session.

        Returns:
            True if this call flipped the session, False if it was already
            inactive or does not exist
        """
        session = await self.uow.sessions.get_by_id(session_id)
        if session is None:
            return False

        flipped = await self.uow.sessions.deactivate_by_id(session_id)
        await self.uow.users.clear_current_session(session.user_id, session_id)

        owner = await self.uow.users.get_by_id(session.user_id)
        if owner is not None and owner.tenant_id is not None:
            await self.license_counter.recount(owner.tenant_id)

        if flipped:
            logger.info("Session %s deactivated", session_id)
        return flipped

    async def deactivate_all_for_user(self, user_id: UUID) -> int:
        """
        Deactivate every active session of a user.

        Returns:
            Number of sessions flipped by this call
        """
        user = await self.uow.users.get_by_id(user_id)
        if user is None:
            return 0

        session_ids = await self.uow.sessions.deactivate_all_by_user_id(user_id)
        await self.uow.users.clear_current_session(user_id)
        if user.tenant_id is not None:
            await self.license_counter.recount(user.tenant_id)

        if session_ids:
            logger.info(
                "Deactivated %s session(s) for user %s", len(session_ids), user_id
            )
        return len(session_ids)

    async def sweep_expired(self) -> SweepReport:
        """
        Deactivate all expired sessions and recount each affected tenant once.
        """
        now = utcnow()
        candidates = await self.uow.sessions.find_expired_active(now)
        if not candidates:
            return SweepReport(sessions_deactivated=0, tenants_recounted=0)

        session_ids = [session_id for session_id, _ in candidates]
        deactivated = await self.uow.sessions.deactivate_expired(session_ids, now)
        await self.uow.users.clear_current_sessions(session_ids)

        tenant_ids = {tenant_id for _, tenant_id in candidates if tenant_id is not None}
        for tenant_id in tenant_ids:
            await self.license_counter.recount(tenant_id)

        logger.info(
            "Expiry sweep deactivated %s session(s) across %s tenant(s)",
            deactivated,
            len(tenant_ids),
        )
        return SweepReport(
            sessions_deactivated=deactivated, tenants_recounted=len(tenant_ids)
        )

    async def get_active_sessions(
        self, tenant_id: UUID
    ) -> List[Tuple[UserSession, User]]:
        """Active sessions of a tenant, most recent activity first"""
        return await self.uow.sessions.get_active_by_tenant_id(tenant_id)
