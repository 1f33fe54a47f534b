"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from marketplace.domain import marketplace

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(email: str) -> str:
    return email.strip().lower()


@marketplace.value_object
class EmailAddress:
    """A structurally valid email address: one @, non-empty local and domain parts, a dotted domain."""

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address
        invalid = ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise invalid

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise invalid

        if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise invalid

        if ".." in email:
            raise invalid

        for label in domain_part.split("."):
            if label.startswith("-") or label.endswith("-"):
                raise invalid

        if any(ch in email for ch in _FORBIDDEN):
            raise invalid
