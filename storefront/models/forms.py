"""
Form state

Transient, user-edited values. Validation never raises: it returns a mapping
of field name to message, empty when the form is acceptable.
"""

import re
from dataclasses import dataclass, fields

from .order import PaymentSummary, ShippingSummary

REQUIRED_MESSAGE = "This field is required"
INVALID_EMAIL_MESSAGE = "Enter a valid email address"
PASSWORD_MISMATCH_MESSAGE = "Passwords do not match"

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class FormState:
    """Field update and required-field checks shared by all forms"""

    required_fields: tuple[str, ...] = ()

    def update(self, **values: str) -> None:
        known = {f.name for f in fields(self)}
        for name, value in values.items():
            if name not in known:
                raise AttributeError(f"{type(self).__name__} has no field {name!r}")
            setattr(self, name, value)

    def validate(self) -> dict[str, str]:
        return {
            name: REQUIRED_MESSAGE
            for name in self.required_fields
            if not str(getattr(self, name) or "").strip()
        }


@dataclass
class ShippingForm(FormState):
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "Albania"
    phone: str = ""

    required_fields = ("first_name", "last_name", "address", "city", "zip_code", "phone")

    def to_summary(self) -> ShippingSummary:
        return ShippingSummary(
            name=f"{self.first_name.strip()} {self.last_name.strip()}",
            address=self.address.strip(),
            city=self.city.strip(),
            state=self.state.strip(),
            zip_code=self.zip_code.strip(),
            country=self.country.strip(),
            phone=self.phone.strip(),
        )


@dataclass
class PaymentForm(FormState):
    card_name: str = ""
    card_number: str = ""
    exp_date: str = ""
    cvv: str = ""
    payment_method: str = "credit"

    required_fields = ("card_name", "card_number", "exp_date", "cvv")

    def to_summary(self) -> PaymentSummary:
        # Only the last four digits leave the form
        digits = "".join(ch for ch in self.card_number if ch.isdigit())
        return PaymentSummary(
            method=self.payment_method,
            card_name=self.card_name.strip(),
            last_four=digits[-4:] or None,
        )


@dataclass
class RegistrationForm(FormState):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    phone: str = ""

    required_fields = ("first_name", "last_name", "email", "password", "confirm_password")

    def validate(self) -> dict[str, str]:
        errors = super().validate()
        if "email" not in errors and not EMAIL_PATTERN.match(self.email.strip()):
            errors["email"] = INVALID_EMAIL_MESSAGE
        if "confirm_password" not in errors and self.password != self.confirm_password:
            errors["confirm_password"] = PASSWORD_MISMATCH_MESSAGE
        return errors

    def to_payload(self) -> dict:
        payload = {
            "firstName": self.first_name.strip(),
            "lastName": self.last_name.strip(),
            "email": self.email.strip(),
            "password": self.password,
        }
        if self.phone:
            payload["phone"] = self.phone.strip()
        return payload
