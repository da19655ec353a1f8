from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class IdentityUser:
    """User object returned by the identity service."""
    id: str
    email: str


@dataclass(slots=True, frozen=True)
class AuthUser:
    """Caller identity recovered from a verified claims token."""
    id: str
    email: str
