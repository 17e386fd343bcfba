from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from bookstore_api.models.base import Base

#Author
class Author(Base):
    __tablename__: str = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
