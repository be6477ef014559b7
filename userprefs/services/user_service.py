"""
User directory lookups.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from ..logging_config import db_logger
from ..models.user import User
from ..responses import ResultStatus, ServiceResult
from ..schemas.user import UserResponse


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self, filter: Optional[str] = None) -> List[User]:
        query = self.db.query(User)
        if filter:
            query = query.filter(User.name.ilike(f"%{filter}%"))
        return query.order_by(User.id).all()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()


class UserService:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    def find_all(self, filter: Optional[str] = None) -> ServiceResult:
        """Retrieve all users, optionally narrowed by a name filter."""
        try:
            users = self.repository.find_all(filter)
            if not users:
                return ServiceResult.failure("No Users found", ResultStatus.NOT_FOUND)
            data = [UserResponse.model_validate(u).model_dump(mode="json") for u in users]
            return ServiceResult.ok("Users found", data)
        except Exception as ex:
            db_logger.error("Error finding all users", error=ex, filter=filter)
            return ServiceResult.failure(
                "An error occurred while retrieving users.",
                ResultStatus.INTERNAL_ERROR,
            )

    def find_by_id(self, user_id: int) -> ServiceResult:
        try:
            user = self.repository.find_by_id(user_id)
            if not user:
                return ServiceResult.failure("User not found", ResultStatus.NOT_FOUND)
            return ServiceResult.ok("User found", UserResponse.model_validate(user).model_dump(mode="json"))
        except Exception as ex:
            db_logger.error(f"Error finding user with id {user_id}", error=ex, user_id=user_id)
            return ServiceResult.failure(
                "An error occurred while finding user.",
                ResultStatus.INTERNAL_ERROR,
            )
