from enum import Enum
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import BaseModel, Field, PlainValidator, StrictBool, StrictStr, StringConstraints, field_validator


class NotificationChannel(str, Enum):
    EMAIL = "email"
    MOBILEPUSH = "mobilepush"


def _check_mode_value(value: Any) -> Union[str, bool]:
    if not isinstance(value, (str, bool)):
        raise ValueError("must be a string or a boolean")
    return value


ModeName = Annotated[StrictStr, StringConstraints(min_length=1)]
ModeValue = Annotated[Union[str, bool], PlainValidator(_check_mode_value)]
NotificationMatrix = Dict[NotificationChannel, Dict[ModeName, ModeValue]]


class SettingsDocument(BaseModel):
    """Settings document as accepted on a full replace.

    Both keys may be omitted, and whatever is omitted is filled in by the
    store's merge policy. An explicit null is rejected.
    """
    display_dark: Optional[StrictBool] = Field(default=None, alias="displayDark")
    notifications: Optional[NotificationMatrix] = None

    class Config:
        extra = "forbid"

    @field_validator("display_dark", "notifications")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class NotificationSettingUpdate(BaseModel):
    channel: NotificationChannel = Field(alias="notificationType")
    mode: ModeName = Field(alias="notificationMode")
    value: ModeValue = Field(alias="notificationModeValue")

    class Config:
        extra = "forbid"
