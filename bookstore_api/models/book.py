from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import ForeignKey, Numeric, Integer, Text
from decimal import Decimal
from bookstore_api.models.base import Base

#Book
class Book(Base):
    __tablename__: str = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    isbn: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    # No relationship(); the owning author is looked up explicitly
    author_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("authors.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
