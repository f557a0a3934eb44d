"""
Form models and client-side validation for checkout and contact.

Validation returns a FormIssue describing what to tell the user rather
than raising; the first failing rule wins, matching the order customers
see in the UI.
"""
import re
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.cart.models import Cart
from storefront.errors import (
    ERROR_EMPTY_CART,
    ERROR_INVALID_EMAIL,
    ERROR_INVALID_PHONE,
    WARNING_MISSING_FIELDS,
)
from storefront.notifications import NotificationKind

PHONE_PATTERN = re.compile(r"^[+]?[\d\s\-\(\)]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class FormIssue:
    """A validation failure to surface as a notification."""
    kind: NotificationKind
    message: str
    missing_fields: tuple = ()


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_PATTERN.match(phone))


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


class _FormModel(BaseModel):
    """Form state; all fields trimmed, empty by default."""
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    # field name -> label shown to the user
    REQUIRED_LABELS: ClassVar[Dict[str, str]] = {}

    def missing_fields(self) -> List[str]:
        return [label for name, label in self.REQUIRED_LABELS.items() if not getattr(self, name)]

    def reset(self) -> None:
        for name in type(self).model_fields:
            setattr(self, name, "")

    def _missing_issue(self) -> Optional[FormIssue]:
        missing = self.missing_fields()
        if not missing:
            return None
        return FormIssue(
            kind=NotificationKind.WARNING,
            message=WARNING_MISSING_FIELDS.format(fields=", ".join(missing)),
            missing_fields=tuple(missing),
        )


class BillingDetails(_FormModel):
    """Checkout billing form."""
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    phone: str = ""
    building: str = ""
    apartment: str = ""

    REQUIRED_LABELS: ClassVar[Dict[str, str]] = {
        "first_name": "First Name",
        "last_name": "Last Name",
        "address": "Address",
        "phone": "Phone Number",
        "building": "Building Number",
        "apartment": "Apartment Number",
    }

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def validate_for(self, cart: Cart) -> Optional[FormIssue]:
        """Check the form against the cart about to be ordered."""
        if self.phone and not is_valid_phone(self.phone):
            return FormIssue(NotificationKind.ERROR, ERROR_INVALID_PHONE)
        if cart.is_empty:
            return FormIssue(NotificationKind.ERROR, ERROR_EMPTY_CART)
        return self._missing_issue()


class ContactDetails(_FormModel):
    """Contact form."""
    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""

    REQUIRED_LABELS: ClassVar[Dict[str, str]] = {
        "name": "Name",
        "email": "Email",
        "phone": "Phone",
        "message": "Message",
    }

    def validate_form(self) -> Optional[FormIssue]:
        if self.email and not is_valid_email(self.email):
            return FormIssue(NotificationKind.ERROR, ERROR_INVALID_EMAIL)
        if self.phone and not is_valid_phone(self.phone):
            return FormIssue(NotificationKind.ERROR, ERROR_INVALID_PHONE)
        return self._missing_issue()


class OrderRequest(BaseModel):
    """Order payload sent to the remote API."""
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(serialization_alias="fName")
    last_name: str = Field(serialization_alias="lName")
    address: str = Field(serialization_alias="adress")
    phone: str
    building: str
    apartment: str = Field(serialization_alias="apart")
    cart: List[Dict[str, Any]]

    @classmethod
    def build(cls, billing: BillingDetails, cart: Cart) -> "OrderRequest":
        return cls(**billing.model_dump(), cart=cart.to_list())

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class ContactRequest(BaseModel):
    """Contact payload sent to the remote API."""
    name: str
    email: str
    phone: str
    message: str

    @classmethod
    def build(cls, details: ContactDetails) -> "ContactRequest":
        return cls(**details.model_dump())

    def to_payload(self) -> dict:
        return self.model_dump()
