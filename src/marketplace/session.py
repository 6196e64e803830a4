"""
Authentication state for gated views

The current user is one of three states: not resolved yet, anonymous, or
authenticated with a role. ``dashboard_route`` turns a state into a routing
decision without side effects; callers perform the navigation themselves.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Union

import httpx
from supabase import AuthError

from .errors import AuthenticationError, TransportError
from .models.enums import ADMIN_ROLE, DEFAULT_ROLE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unresolved:
    """The session has not been checked yet."""


@dataclass(frozen=True)
class Anonymous:
    """No signed-in user."""


@dataclass(frozen=True)
class Authenticated:
    user_id: str
    role: str = DEFAULT_ROLE

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


AuthState = Union[Unresolved, Anonymous, Authenticated]


class RouteDecision(enum.Enum):
    WAIT = 'wait'
    REDIRECT = 'redirect'
    LOAD = 'load'


def dashboard_route(state: AuthState) -> RouteDecision:
    """
    Decide what the admin dashboard does for a given auth state.

    Unresolved and anonymous sessions wait (the user may still sign in),
    non-admin users are redirected away, admins load the dashboard.
    """
    if isinstance(state, Authenticated):
        return RouteDecision.LOAD if state.is_admin else RouteDecision.REDIRECT
    return RouteDecision.WAIT


class SessionResolver:
    """Maps the Supabase auth session to an AuthState."""

    def __init__(self, auth, repository):
        self.auth = auth
        self.repository = repository

    async def sign_in(self, email: str, password: str) -> AuthState:
        try:
            await self.auth.sign_in_with_password({'email': email, 'password': password})
        except AuthError as e:
            logger.error(f"Sign in rejected for {email}: {e.message}")
            raise AuthenticationError() from e
        except httpx.HTTPError as e:
            logger.error(f"Transport failure while signing in: {e}")
            raise TransportError(f"Failed to sign in: {e}") from e
        return await self.resolve()

    async def resolve(self) -> AuthState:
        """
        Read the signed-in user and their role.

        The role comes from the users table; a user without a row there gets
        the default role.

        Raises:
            AuthenticationError: The stored session was rejected
            TransportError: The auth provider or the users table is unreachable
        """
        try:
            response = await self.auth.get_user()
        except AuthError as e:
            logger.error(f"Session rejected: {e.message}")
            raise AuthenticationError("Your session has expired. Please sign in again.") from e
        except httpx.HTTPError as e:
            logger.error(f"Transport failure while reading the session: {e}")
            raise TransportError(f"Failed to read the session: {e}") from e
        if response is None or response.user is None:
            logger.info("No signed-in user")
            return Anonymous()

        user_id = str(response.user.id)
        user = await self.repository.fetch_user_by_id(user_id)
        role = user.role if user else DEFAULT_ROLE
        logger.info(f"Signed in as {user_id} with role {role}")
        return Authenticated(user_id=user_id, role=role)
