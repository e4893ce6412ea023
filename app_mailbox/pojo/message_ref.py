from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class MessageRef:
    """
    Reference to one message row of the caller, either by database id or by protocol Message-ID
    """
    value: Union[int, str]

    @property
    def is_row_id(self) -> bool:
        return isinstance(self.value, int)

    @classmethod
    def parse(cls, raw) -> "MessageRef":
        """
        Raises:
            ValueError: if raw is empty
        """
        if isinstance(raw, bool):
            raise ValueError("Message id must be a string or an integer")
        if isinstance(raw, int):
            return cls(raw)
        if not isinstance(raw, str) or not raw.strip():
            raise ValueError("Message id cannot be empty")

        raw = raw.strip()
        if raw.isdigit():
            return cls(int(raw))
        return cls(raw)

    def as_filter(self) -> dict:
        """ORM lookup selecting this message"""
        if self.is_row_id:
            return {"id": self.value}
        return {"message_id": self.value}

    def matches(self, row_id: int, message_id: str) -> bool:
        if self.is_row_id:
            return self.value == row_id
        return self.value == message_id

    def __str__(self):
        return str(self.value)
