from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str
    name: str
    raw: dict[str, Any] = field(default_factory=dict)


class AuthProvider(Protocol):
    def validate(self, token: str) -> str:
        """Return the user id behind ``token`` or raise ``AuthError``."""
        ...

    def sign_up(self, email: str, password: str, name: str) -> AuthUser: ...


class BlobStore(Protocol):
    def upload(self, path: str, content: bytes, content_type: str) -> None: ...

    def signed_url(self, path: str, ttl_seconds: int) -> str: ...

    def ensure_bucket(self) -> None: ...
