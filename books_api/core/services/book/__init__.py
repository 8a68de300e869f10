from .book_records import BookRecordService

__all__ = ["BookRecordService"]
