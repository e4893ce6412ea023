from dataclasses import dataclass
from enum import Enum
from typing import Union

from app_mailbox.enums.folder_type_enum import FolderTypeEnum


class FolderRefKind(Enum):
    BY_ID = "id"
    BY_NAME = "name"
    BY_SYSTEM_TYPE = "type"


@dataclass(frozen=True)
class FolderRef:
    """
    Reference to a folder of the caller

    Raw strings coming from the API are mapped explicitly:
    digits -> BY_ID, a system type token (any case) -> BY_SYSTEM_TYPE, else BY_NAME
    """
    kind: FolderRefKind
    value: Union[int, str, FolderTypeEnum]

    @classmethod
    def by_id(cls, folder_id: int) -> "FolderRef":
        return cls(FolderRefKind.BY_ID, int(folder_id))

    @classmethod
    def by_name(cls, name: str) -> "FolderRef":
        return cls(FolderRefKind.BY_NAME, name.strip())

    @classmethod
    def by_system_type(cls, folder_type: FolderTypeEnum) -> "FolderRef":
        if not folder_type.is_system:
            raise ValueError(f"'{folder_type.value}' is not a system folder type")
        return cls(FolderRefKind.BY_SYSTEM_TYPE, folder_type)

    @classmethod
    def parse(cls, raw) -> "FolderRef":
        """
        Parse a folder reference from a request value

        Raises:
            ValueError: if raw is empty or not a string/int
        """
        if isinstance(raw, bool):
            raise ValueError("Folder reference must be a name, type or id")
        if isinstance(raw, int):
            return cls.by_id(raw)
        if not isinstance(raw, str) or not raw.strip():
            raise ValueError("Folder reference cannot be empty")

        raw = raw.strip()
        if raw.isdigit():
            return cls.by_id(int(raw))

        folder_type = FolderTypeEnum.of(raw)
        if folder_type is not None and folder_type.is_system:
            return cls.by_system_type(folder_type)
        return cls.by_name(raw)

    def __str__(self):
        if self.kind is FolderRefKind.BY_SYSTEM_TYPE:
            return self.value.value
        return str(self.value)
