"""Customer aggregate — the person an order may be associated with.

Orders reference customers by identifier only; guests order without one.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from ordering.domain import ordering


@ordering.aggregate
class Customer:
    name = String(required=True, max_length=150)
    email = String(required=True, max_length=254)
    cpf = String(max_length=11)
    registered_at = DateTime()

    @invariant.post
    def email_must_have_a_single_at_sign(self):
        if self.email and self.email.count("@") != 1:
            raise ValidationError({"email": ["Invalid email address"]})

    @invariant.post
    def cpf_must_be_eleven_digits(self):
        if self.cpf and not (self.cpf.isdigit() and len(self.cpf) == 11):
            raise ValidationError({"cpf": ["CPF must contain exactly 11 digits"]})

    @classmethod
    def register(cls, name, email, cpf=None):
        return cls(
            name=name,
            email=email,
            cpf=cpf,
            registered_at=datetime.now(UTC),
        )
