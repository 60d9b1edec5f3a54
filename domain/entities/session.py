from dataclasses import dataclass
from enum import Enum
from typing import Union


class Role(Enum):
    ADMIN = "admin"
    OPERATOR = "operator"
    CLIENT = "client"


@dataclass(frozen=True)
class Unauthenticated:
    pass


@dataclass(frozen=True)
class Profile:
    id: str
    name: str
    email: str
    role: Role

    @property
    def can_manage_payments(self) -> bool:
        return self.role in (Role.ADMIN, Role.OPERATOR)


Session = Union[Unauthenticated, Profile]
