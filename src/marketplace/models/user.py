"""
User Model

Users are created by the auth provider; the marketplace only reads and
deletes them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from dateutil.parser import isoparse

from .enums import ADMIN_ROLE, DEFAULT_ROLE


@dataclass(frozen=True)
class User:
    id: str
    email: str
    role: str = DEFAULT_ROLE
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'email': self.email,
            'role': self.role,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create User from a database row"""
        created_at = data.get('created_at')
        if isinstance(created_at, str):
            # Postgres trims trailing zeros from the fraction and may end in "Z"
            created_at = isoparse(created_at)
        return cls(
            id=str(data['id']),
            email=data.get('email') or '',
            role=data.get('role') or DEFAULT_ROLE,
            created_at=created_at
        )
