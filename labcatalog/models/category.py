import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column
from labcatalog.db.base import Base

class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    active: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=True, server_default=sa.true())
    display_order: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0, server_default="0")
    # Parent is resolved by id lookup; no relationship() so the tree never forms an object cycle
    parent_id: Mapped[int | None] = mapped_column(
        sa.Integer, sa.ForeignKey("categories.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True
    )

    created_at: Mapped[sa.DateTime] = mapped_column(sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())
    updated_at: Mapped[sa.DateTime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(), onupdate=sa.func.now()
    )

    __table_args__ = (
        sa.CheckConstraint("parent_id IS NULL OR parent_id <> id", name="ck_category_not_own_parent"),
        sa.Index("ix_categories_parent_order", "parent_id", "display_order", "name"),
        sa.Index("ix_categories_active_order", "active", "display_order", "name"),
    )
