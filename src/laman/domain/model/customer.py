"""Customer identity of an order.

An order belongs either to a registered user or to a guest who leaves
inline contact details.  The two cases are separate types so an order
can never hold both identities or neither.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from laman.domain.exceptions import ValidationError


@dataclass(frozen=True)
class RegisteredCustomer:
    """A signed-in user.

    ``name`` and ``phone`` are optional contact text for the courier;
    they do not identify the customer.
    """

    user_id: UUID
    name: str | None = None
    phone: str | None = None

    @property
    def display_name(self) -> str | None:
        return self.name

    @property
    def contact_phone(self) -> str | None:
        return self.phone


@dataclass(frozen=True)
class GuestCustomer:
    name: str
    phone: str
    address: str

    def __post_init__(self) -> None:
        for field_name in ("name", "phone", "address"):
            value = getattr(self, field_name)
            if not value or not value.strip():
                raise ValidationError(f"Guest {field_name} is required")

    @property
    def display_name(self) -> str | None:
        return self.name

    @property
    def contact_phone(self) -> str | None:
        return self.phone


Customer = RegisteredCustomer | GuestCustomer


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def resolve_customer(
    user_id: UUID | None,
    guest_name: str | None,
    guest_phone: str | None,
    guest_address: str | None,
) -> Customer:
    """Pick the identity mode of an incoming order request.

    Exactly one mode must be present: a user id, or the complete guest
    triple.  Supplying both, or neither, is rejected.  A registered user
    may still pass a name or phone, which are kept as contact text.
    """
    guest_fields = (guest_name, guest_phone, guest_address)
    guest_complete = not any(_blank(value) for value in guest_fields)

    if user_id is not None and guest_complete:
        raise ValidationError(
            "Provide either a user id or guest details, not both"
        )
    if user_id is not None:
        return RegisteredCustomer(
            user_id=user_id,
            name=None if _blank(guest_name) else guest_name.strip(),
            phone=None if _blank(guest_phone) else guest_phone.strip(),
        )
    if not guest_complete:
        raise ValidationError(
            "Either a user id or guest name, phone and address are required"
        )
    return GuestCustomer(
        name=guest_name.strip(),
        phone=guest_phone.strip(),
        address=guest_address.strip(),
    )
