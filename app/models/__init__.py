from app.models.user import User
from app.models.book import Book
from app.models.status import Status
from app.models.order import Order, DeliveryMethod, BillingStatus
from app.models.assignment import Assignment, AssignmentReader

__all__ = ["User", "Book", "Status", "Order", "DeliveryMethod", "BillingStatus", "Assignment", "AssignmentReader"]
