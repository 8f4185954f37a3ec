# schemas.py
"""Invoice form validation with one message per field."""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Literal, Mapping, NamedTuple, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

FIELD_MESSAGES: Dict[str, str] = {
  "customerId": "Please select a customer.",
  "amount": "Please enter an amount greater than $0.",
  "status": "Please select an invoice status.",
}

FieldErrors = Dict[str, List[str]]

# largest amount whose cents fit a 32-bit integer column
MAX_AMOUNT = Decimal("21474836.47")


def to_minor_units(amount: Decimal) -> int:
  try:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
  except InvalidOperation as e:
    raise ValueError(f"amount {amount} cannot be expressed in cents") from e


class InvoiceFields(BaseModel):
  model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

  customer_id: str = Field(alias="customerId", min_length=1)
  amount: Decimal = Field(gt=0, le=MAX_AMOUNT)
  status: Literal["pending", "paid"]

  @field_validator("amount")
  @classmethod
  def _at_least_one_cent(cls, v: Decimal) -> Decimal:
    if to_minor_units(v) < 1:
      raise ValueError("amount rounds to zero cents")
    return v

  @property
  def amount_in_cents(self) -> int:
    return to_minor_units(self.amount)


# create and update accept the same client-supplied subset
CreateInvoice = InvoiceFields
UpdateInvoice = InvoiceFields

M = TypeVar("M", bound=BaseModel)


class FormValidationError(Exception):
  def __init__(self, errors: FieldErrors):
    super().__init__("; ".join(f"{k}: {', '.join(v)}" for k, v in errors.items()))
    self.errors = errors


class ParseResult(NamedTuple):
  data: Optional[Any]
  errors: Optional[FieldErrors]

  @property
  def success(self) -> bool:
    return self.errors is None


def _field_name(model: Type[BaseModel], loc: Any) -> str:
  name = str(loc[0]) if loc else "__root__"
  info = model.model_fields.get(name)
  if info is not None and info.alias:
    return info.alias
  return name


def field_errors(model: Type[BaseModel], exc: ValidationError) -> FieldErrors:
  errors: FieldErrors = {}
  for err in exc.errors():
    name = _field_name(model, err.get("loc"))
    msg = FIELD_MESSAGES.get(name, err.get("msg", "Invalid value."))
    bucket = errors.setdefault(name, [])
    if msg not in bucket:
      bucket.append(msg)
  return errors


def _collect(model: Type[BaseModel], raw: Mapping[str, Any]) -> Dict[str, Any]:
  # read only the declared form fields, like FormData.get(); missing keys become None
  keys = [info.alias or name for name, info in model.model_fields.items()]
  return {k: raw.get(k) for k in keys}


def parse_form(model: Type[M], raw: Mapping[str, Any]) -> M:
  """Validate raw form fields, raising FormValidationError on any invalid field."""
  try:
    return model.model_validate(_collect(model, raw))
  except ValidationError as e:
    raise FormValidationError(field_errors(model, e)) from e


def safe_parse_form(model: Type[M], raw: Mapping[str, Any]) -> ParseResult:
  """Validate raw form fields, returning every field error instead of raising."""
  try:
    return ParseResult(data=parse_form(model, raw), errors=None)
  except FormValidationError as e:
    return ParseResult(data=None, errors=e.errors)
