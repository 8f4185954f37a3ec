# invoice_route.py
from typing import Optional
from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse, RedirectResponse
from sqlmodel import Session, select

import actions
from actions import ActionResult, Outcome
from cache import PathCache, get_view_cache
from db import get_session
from models import Customer

router = APIRouter(prefix="/dashboard/invoices", tags=["invoices"])

_STATUS_CODES = {
  Outcome.SUCCESS: 200,
  Outcome.VALIDATION_FAILED: 422,
  Outcome.PERSISTENCE_FAILED: 500,
}

def _respond(result: ActionResult):
  if result.redirect_to:
    return RedirectResponse(result.redirect_to, status_code=303)
  code = _STATUS_CODES.get(result.outcome, 200)
  return JSONResponse(status_code=code, content=result.model_dump(mode="json"))

def _form(customerId: Optional[str], amount: Optional[str], status: Optional[str]) -> dict:
  return {"customerId": customerId, "amount": amount, "status": status}

@router.post("/create")
def create_invoice(
  customerId: Optional[str] = Form(None),
  amount: Optional[str] = Form(None),
  status: Optional[str] = Form(None),
  session: Session = Depends(get_session),
  cache: PathCache = Depends(get_view_cache),
):
  result = actions.create_invoice(session, cache, actions.initial_state(), _form(customerId, amount, status))
  return _respond(result)

@router.post("/{invoice_id}/edit")
def update_invoice(
  invoice_id: str,
  customerId: Optional[str] = Form(None),
  amount: Optional[str] = Form(None),
  status: Optional[str] = Form(None),
  session: Session = Depends(get_session),
  cache: PathCache = Depends(get_view_cache),
):
  result = actions.update_invoice(session, cache, invoice_id, _form(customerId, amount, status))
  return _respond(result)

@router.post("/{invoice_id}/delete")
def delete_invoice(
  invoice_id: str,
  session: Session = Depends(get_session),
  cache: PathCache = Depends(get_view_cache),
):
  return _respond(actions.delete_invoice(session, cache, invoice_id))

@router.post("/seed")
def seed_if_empty(session: Session = Depends(get_session)):
  # Seed only if there are no customers yet
  any_customer = session.exec(select(Customer)).first()
  if any_customer:
    return {"ok": True, "seeded": False}

  session.add_all([
    Customer(name="Delba de Oliveira", email="delba@oliveira.com"),
    Customer(name="Lee Robinson", email="lee@robinson.com"),
    Customer(name="Hector Simpson", email="hector@simpson.com"),
    Customer(name="Steven Tey", email="steven@tey.com"),
  ])
  session.commit()
  return {"ok": True, "seeded": True}
