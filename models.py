# models.py
from uuid import uuid4

from sqlmodel import SQLModel, Field

INVOICE_STATUSES = ("pending", "paid")

class Customer(SQLModel, table=True):
  __tablename__ = "customers"

  id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, index=True)
  name: str
  email: str

class Invoice(SQLModel, table=True):
  __tablename__ = "invoices"

  id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, index=True)
  customer_id: str = Field(foreign_key="customers.id", index=True)
  amount: int  # minor units (cents)
  status: str = "pending"  # pending|paid
  date: str  # YYYY-MM-DD, set on create
