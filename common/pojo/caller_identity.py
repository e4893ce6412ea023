import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class CallerIdentity:
    """
    Authenticated caller resolved before any mailbox operation runs
    """
    user_id: uuid.UUID
    email: str

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    @classmethod
    def of(cls, user_id, email: str) -> "CallerIdentity":
        """
        Build from raw values, normalizing user_id to UUID and email to lower case

        Raises:
            ValueError: if user_id is not a UUID or email is empty
        """
        if not isinstance(user_id, uuid.UUID):
            user_id = uuid.UUID(str(user_id))
        email = (email or "").strip().lower()
        if not email:
            raise ValueError("Caller email is required")
        return cls(user_id=user_id, email=email)

    def to_dict(self) -> dict:
        return {"user_id": str(self.user_id), "email": self.email}
