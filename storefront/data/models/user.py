from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, false

from storefront.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    password = Column(String, nullable=False)  # hash, nigdy plaintext
    avatar_url = Column(String, nullable=True)

    is_admin = Column(Boolean, nullable=False, default=False)
    is_disabled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    #jeden aktywny user na email, wylaczeni moga miec duplikaty
    __table_args__ = (
        Index(
            "uq_users_active_email",
            "email",
            unique=True,
            sqlite_where=is_disabled == false(),
            postgresql_where=is_disabled == false(),
        ),
    )
