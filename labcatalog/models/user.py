import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column
from labcatalog.db.base import Base

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(sa.String(50), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(sa.String(255), unique=True, nullable=True)
    role: Mapped[str] = mapped_column(sa.String(20), nullable=False, default="user", server_default="user")
    active: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=True, server_default=sa.true())
    created_at: Mapped[sa.DateTime] = mapped_column(sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())

    __table_args__ = (
        sa.CheckConstraint("role in ('user','admin','superadmin')", name="ck_user_role"),
    )
