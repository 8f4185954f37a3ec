# actions.py
"""Create, update and delete actions behind the invoice forms."""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col

from cache import ViewCache
from models import Invoice
from schemas import (
  CreateInvoice,
  FieldErrors,
  UpdateInvoice,
  safe_parse_form,
)

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"


class Outcome(str, Enum):
  SUCCESS = "success"
  VALIDATION_FAILED = "validation_failed"
  PERSISTENCE_FAILED = "persistence_failed"


class ActionResult(BaseModel):
  outcome: Optional[Outcome] = None
  errors: Optional[FieldErrors] = None
  message: Optional[str] = None
  redirect_to: Optional[str] = None

  @property
  def ok(self) -> bool:
    return self.outcome == Outcome.SUCCESS


def initial_state() -> ActionResult:
  return ActionResult(errors={}, message=None)


def _today() -> str:
  return datetime.now(timezone.utc).date().isoformat()


def _validation_failed(errors: FieldErrors, message: str) -> ActionResult:
  return ActionResult(outcome=Outcome.VALIDATION_FAILED, errors=errors, message=message)


def _persistence_failed(message: str) -> ActionResult:
  return ActionResult(outcome=Outcome.PERSISTENCE_FAILED, message=message)


def _revalidate_and_redirect(cache: ViewCache) -> ActionResult:
  # invalidate first so the listing we land on is rendered fresh
  cache.revalidate_path(INVOICES_PATH)
  return ActionResult(outcome=Outcome.SUCCESS, redirect_to=INVOICES_PATH)


def create_invoice(
  session: Session,
  cache: ViewCache,
  prev_state: Optional[ActionResult],
  form: Mapping[str, Any],
) -> ActionResult:
  if prev_state is not None and prev_state.errors:
    logger.debug("[create_invoice] resubmission after errors on %s", sorted(prev_state.errors))

  parsed = safe_parse_form(CreateInvoice, form)
  if not parsed.success:
    logger.warning("[create_invoice] validation failed for %s", sorted(parsed.errors))
    return _validation_failed(parsed.errors, "Missing Fields. Failed to Create Invoice.")

  fields = parsed.data
  invoice_id = str(uuid4())
  amount_in_cents = fields.amount_in_cents

  try:
    session.add(Invoice(
      id=invoice_id,
      customer_id=fields.customer_id,
      amount=amount_in_cents,
      status=fields.status,
      date=_today(),
    ))
    session.commit()
  except SQLAlchemyError:
    session.rollback()
    logger.exception("[create_invoice] insert failed")
    return _persistence_failed("Database Error: Failed to Create Invoice.")

  logger.info("[create_invoice] invoice inserted id=%s amount=%d status=%s",
              invoice_id, amount_in_cents, fields.status)
  return _revalidate_and_redirect(cache)


def update_invoice(
  session: Session,
  cache: ViewCache,
  invoice_id: str,
  form: Mapping[str, Any],
  prev_state: Optional[ActionResult] = None,
) -> ActionResult:
  if prev_state is not None and prev_state.errors:
    logger.debug("[update_invoice] resubmission after errors on %s", sorted(prev_state.errors))

  parsed = safe_parse_form(UpdateInvoice, form)
  if not parsed.success:
    logger.warning("[update_invoice] validation failed for %s: %s", invoice_id, sorted(parsed.errors))
    return _validation_failed(parsed.errors, "Missing Fields. Failed to Update Invoice.")

  fields = parsed.data
  stmt = (
    update(Invoice)
    .where(col(Invoice.id) == invoice_id)
    .values(customer_id=fields.customer_id, amount=fields.amount_in_cents, status=fields.status)
  )

  try:
    result = session.exec(stmt)
    session.commit()
  except SQLAlchemyError:
    session.rollback()
    logger.exception("[update_invoice] update failed for %s", invoice_id)
    return _persistence_failed("Database Error: Failed to Update Invoice.")

  # zero rows for an unknown id is still reported as success
  logger.info("[update_invoice] id=%s rows=%d", invoice_id, result.rowcount)
  return _revalidate_and_redirect(cache)


def delete_invoice(session: Session, cache: ViewCache, invoice_id: str) -> ActionResult:
  try:
    result = session.exec(delete(Invoice).where(col(Invoice.id) == invoice_id))
    session.commit()
  except SQLAlchemyError:
    session.rollback()
    logger.exception("[delete_invoice] delete failed for %s", invoice_id)
    return _persistence_failed("Database Error: Failed to Delete Invoice.")

  logger.info("[delete_invoice] id=%s rows=%d", invoice_id, result.rowcount)
  cache.revalidate_path(INVOICES_PATH)
  return ActionResult(outcome=Outcome.SUCCESS, message="Deleted Invoice.")
