from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_state(self, user_id: int, is_disabled: bool) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(
                UserModel.id == user_id,
                UserModel.is_disabled == is_disabled,
            )
        ).scalar_one_or_none()

    def get_active_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(
                UserModel.email == email,
                UserModel.is_disabled.is_(False),
            )
        ).scalar_one_or_none()

    def get_active_by_name(self, name: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel)
            .where(UserModel.name == name, UserModel.is_disabled.is_(False))
            .limit(1)
        ).scalar_one_or_none()

    def list_users(self, is_disabled: bool) -> list[UserModel]:
        return list(
            self.db.execute(
                select(UserModel)
                .where(UserModel.is_disabled == is_disabled)
                .order_by(UserModel.id)
            ).scalars()
        )

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.flush()
        return user

    def set_disabled(self, user_id: int, is_disabled: bool) -> int:
        # zmiana tylko z przeciwnego stanu, 0 wierszy = ktos nas wyprzedzil
        result = self.db.execute(
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.is_disabled == (not is_disabled))
            .values(is_disabled=is_disabled)
        )
        return result.rowcount

    def delete_user(self, user_id: int) -> int:
        result = self.db.execute(
            delete(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
