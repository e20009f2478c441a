from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from storefront.data.models.refresh_token import RefreshTokenModel


class RefreshTokenRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_token(self, token: RefreshTokenModel) -> RefreshTokenModel:
        self.db.add(token)
        self.db.flush()
        return token

    def list_for_user(self, user_id: int) -> list[RefreshTokenModel]:
        return list(
            self.db.execute(
                select(RefreshTokenModel).where(RefreshTokenModel.user_id == user_id)
            ).scalars()
        )

    def delete_for_user(self, user_id: int) -> int:
        result = self.db.execute(
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
