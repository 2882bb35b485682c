from dataclasses import dataclass
from typing import Optional

ADMIN_ROLE = "admin"
CONSULTANT_ROLE = "consultant"


@dataclass(frozen=True)
class Actor:
    user_id: int
    role: str
    consultant_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def scope_consultant_id(self) -> Optional[int]:
        """Consultor ao qual as consultas ficam restritas; ``None`` para admin."""
        return None if self.is_admin else self.consultant_id

    def can_mutate(self, owner_consultant_id: int) -> bool:
        return self.is_admin or self.consultant_id == owner_consultant_id
