import uuid
from dataclasses import dataclass, field


@dataclass
class User:
    username: str
    email: str
    password_hash: str
    role: str = "User"
    id: uuid.UUID = field(default_factory=uuid.uuid4)
