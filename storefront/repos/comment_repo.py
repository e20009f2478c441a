from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from storefront.data.models.comment import CommentModel


class CommentRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_comment(self, comment: CommentModel) -> CommentModel:
        self.db.add(comment)
        self.db.flush()
        return comment

    def disable_by_user(self, user_id: int) -> int:
        # komentarze i odpowiedzi autora
        result = self.db.execute(
            update(CommentModel)
            .where(CommentModel.user_id == user_id, CommentModel.is_disabled.is_(False))
            .values(is_disabled=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def list_disabled_by_user(self, user_id: int) -> list[CommentModel]:
        return list(
            self.db.execute(
                select(CommentModel).where(
                    CommentModel.user_id == user_id,
                    CommentModel.is_disabled.is_(True),
                )
            ).scalars()
        )

    def delete_by_user(self, user_id: int) -> int:
        own_ids = select(CommentModel.id).where(CommentModel.user_id == user_id).scalar_subquery()
        result = self.db.execute(
            delete(CommentModel)
            .where(or_(CommentModel.user_id == user_id, CommentModel.parent_id.in_(own_ids)))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
