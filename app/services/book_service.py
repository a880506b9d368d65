from sqlalchemy.orm import Session
from sqlalchemy import select, func
from fastapi import HTTPException
from app.models.book import Book
from app.schemas.book import BookCreate, BookResponse
from app.schemas.pagination import Page


def get_books(db: Session, page: int = 1, size: int = 10, search: str = "") -> Page:
    query = select(Book)
    if search:
        query = query.where(
            Book.title.icontains(search, autoescape=True)
            | Book.author.icontains(search, autoescape=True)
            | Book.isbn.icontains(search, autoescape=True)
        )
    query = query.order_by(Book.title, Book.id)
    total = db.scalar(select(func.count()).select_from(query.subquery()))
    books = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    return Page.build([BookResponse.model_validate(b) for b in books], total, page, size)


def get_book(db: Session, book_id: int) -> Book:
    book = db.get(Book, book_id)
    if not book:
        raise HTTPException(status_code=404, detail="Livre non trouvé")
    return book


def create_book(db: Session, data: BookCreate) -> Book:
    book = Book(**data.model_dump())
    db.add(book)
    db.commit()
    db.refresh(book)
    return book
