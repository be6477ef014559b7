"""
Validated read/write operations over the settings store.

Every operation returns a ServiceResult; nothing raises to the caller.
"""
from typing import Any, Dict

from pydantic import ValidationError

from ..logging_config import settings_logger
from ..responses import ResultStatus, ServiceResult, field_errors
from ..schemas.settings import NotificationSettingUpdate, SettingsDocument
from .settings_store import SettingsStore


class SettingsService:
    def __init__(self, store: SettingsStore):
        self.store = store

    def get_user_settings(self, user_id: str) -> ServiceResult:
        try:
            document = self.store.get(user_id)
            return ServiceResult.ok("User settings found", document)
        except Exception as ex:
            settings_logger.error(
                f"Error finding user settings for user with id {user_id}",
                error=ex,
                user_id=user_id,
            )
            return ServiceResult.failure(
                "An error occurred while finding user settings.",
                ResultStatus.INTERNAL_ERROR,
            )

    def replace_user_settings(self, user_id: str, document: Any) -> ServiceResult:
        """Replace the whole document, merged onto the defaults."""
        try:
            parsed = SettingsDocument.model_validate(document)
        except ValidationError as ex:
            settings_logger.info("Rejected settings document", user_id=user_id, errors=len(ex.errors()))
            return ServiceResult.failure(
                "Invalid user settings",
                ResultStatus.VALIDATION_ERROR,
                errors=field_errors(ex),
            )

        try:
            merged = self.store.put(user_id, parsed.to_document())
        except Exception as ex:
            settings_logger.error(
                f"Error updating user settings for user with id {user_id}",
                error=ex,
                user_id=user_id,
            )
            return ServiceResult.failure(
                "An error occurred while updating user settings.",
                ResultStatus.INTERNAL_ERROR,
            )

        settings_logger.info("User settings replaced", user_id=user_id, policy=self.store.policy.value)
        return ServiceResult.ok("User settings updated", merged, status_code=201)

    def set_notification_setting(self, user_id: str, channel: Any, mode: Any, value: Any) -> ServiceResult:
        """Set a single notification mode for one channel."""
        payload: Dict[str, Any] = {
            "notificationType": channel,
            "notificationMode": mode,
            "notificationModeValue": value,
        }
        return self.update_notification_setting(user_id, payload)

    def update_notification_setting(self, user_id: str, body: Any) -> ServiceResult:
        """Same as set_notification_setting, from a raw request body.

        The body must hold exactly notificationType, notificationMode and
        notificationModeValue.
        """
        try:
            update = NotificationSettingUpdate.model_validate(body)
        except ValidationError as ex:
            settings_logger.info("Rejected notification setting", user_id=user_id, errors=len(ex.errors()))
            return ServiceResult.failure(
                "Invalid notification setting",
                ResultStatus.VALIDATION_ERROR,
                errors=field_errors(ex),
            )

        try:
            document = self.store.set_field(user_id, update.channel.value, update.mode, update.value)
        except Exception as ex:
            settings_logger.error(
                f"Error updating notification setting for user with id {user_id}",
                error=ex,
                user_id=user_id,
                channel=update.channel.value,
                mode=update.mode,
            )
            return ServiceResult.failure(
                "An error occurred while updating user settings.",
                ResultStatus.INTERNAL_ERROR,
            )

        settings_logger.info(
            "Notification setting updated",
            user_id=user_id,
            channel=update.channel.value,
            mode=update.mode,
        )
        return ServiceResult.ok("User settings updated", document, status_code=201)
