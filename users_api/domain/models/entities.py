"""
Domain entities for the users API.
"""

from dataclasses import dataclass, field
from typing import Any, Dict
import uuid


@dataclass
class User:
    """A user record.

    The id is assigned by whoever builds the user; services pass it
    through untouched.
    """

    id: uuid.UUID = field(default_factory=uuid.uuid4)
    full_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'id': str(self.id),
            'full_name': self.full_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        """Create user from dictionary."""
        user_id = data['id']
        if not isinstance(user_id, uuid.UUID):
            user_id = uuid.UUID(str(user_id))
        return cls(id=user_id, full_name=data.get('full_name', ""))
