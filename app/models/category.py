# app/models/category.py
from __future__ import annotations

from sqlalchemy import DateTime, ForeignKey, Integer, SmallInteger, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.user import User


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # CategoryType: 0 = gasto, 1 = ingreso
    type: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    updated_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    created_by_user = relationship(User, foreign_keys=[created_by])
    updated_by_user = relationship(User, foreign_keys=[updated_by])
    category_users = relationship("CategoryUser", back_populates="category", cascade="all, delete-orphan")


class CategoryUser(Base):
    """Vínculo usuario-categoría (categorías compartidas)."""

    __tablename__ = "category_users"

    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    created_at = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    category = relationship(Category, back_populates="category_users")
    user = relationship(User, back_populates="category_users")
