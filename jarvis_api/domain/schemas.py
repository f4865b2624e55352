"""
Input validation for products, FAQs and contact submissions.

Each entity has a pydantic model built from the shared constraints in
domain.constraints. ``validate_payload`` runs one of them and returns either
the normalized value (defaults applied, strings trimmed, e-mail lowercased) or
every field violation as a readable message. Validation never stops at the
first problem.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Annotated, Mapping, Optional

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from .constraints import CONTACT, FAQ, PRODUCT, TextRule


class ValidationFailed(Exception):
    """Raised when a payload does not satisfy its entity schema."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


def _text(rule: TextRule, **kwargs: Any) -> Any:
    return Field(min_length=rule.min_length, max_length=rule.max_length, **kwargs)


_URI = TypeAdapter(AnyUrl)

Feature = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=PRODUCT.feature.min_length,
        max_length=PRODUCT.feature.max_length,
    ),
]


class _Input(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class ProductIn(_Input):
    name: str = _text(PRODUCT.name)
    description: str = _text(PRODUCT.description)
    price: float = Field(gt=PRODUCT.price_exclusive_min, allow_inf_nan=False)
    image: str = Field(min_length=1, max_length=PRODUCT.image_max_length)
    category: str = _text(PRODUCT.category)
    features: list[Feature] = Field(max_length=PRODUCT.max_features)

    @field_validator("price", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be a number")
        return value

    @field_validator("image")
    @classmethod
    def image_is_uri(cls, value: str) -> str:
        try:
            _URI.validate_python(value)
        except ValidationError:
            raise ValueError("must be a valid uri") from None
        return value


class FAQIn(_Input):
    question: str = _text(FAQ.question)
    answer: str = _text(FAQ.answer)
    category: str = _text(FAQ.category, default=FAQ.default_category)


class ContactIn(_Input):
    name: str = _text(CONTACT.name)
    email: EmailStr
    message: str = _text(CONTACT.message)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


SCHEMAS: dict[str, type[BaseModel]] = {
    "product": ProductIn,
    "faq": FAQIn,
    "contact": ContactIn,
}


@dataclass
class ValidationOutcome:
    value: Optional[dict] = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _describe(error: Mapping[str, Any]) -> str:
    loc = error.get("loc") or ()
    name = ".".join(str(part) for part in loc) or "value"
    kind = error.get("type")
    if kind == "missing":
        reason = "is required"
    elif kind == "extra_forbidden":
        reason = "is not allowed"
    elif kind == "value_error":
        ctx = error.get("ctx") or {}
        reason = str(ctx.get("error") or error.get("msg", "is invalid"))
    else:
        msg = str(error.get("msg") or "is invalid")
        reason = msg[:1].lower() + msg[1:]
    return f'"{name}" {reason}'


def format_errors(exc: ValidationError) -> list[str]:
    return [_describe(err) for err in exc.errors()]


def validate_payload(kind: str, payload: Any) -> ValidationOutcome:
    """Validate ``payload`` against the schema registered for ``kind``."""
    try:
        schema = SCHEMAS[kind]
    except KeyError:
        raise ValueError(f"Unknown entity kind: {kind}") from None
    if not isinstance(payload, Mapping):
        return ValidationOutcome(errors=['"value" must be of type object'])
    try:
        model = schema.model_validate(dict(payload))
    except ValidationError as exc:
        return ValidationOutcome(errors=format_errors(exc))
    return ValidationOutcome(value=model.model_dump())
