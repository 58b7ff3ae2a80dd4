"""Shared schema types — locale coercion and email validation used across request bodies."""

import re
from typing import Annotated

from pydantic import AfterValidator, BeforeValidator

from curator.core.domain_types import Locale

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _check_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("invalid email format")
    return value


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("cannot be empty or whitespace")
    return value


# Any incoming locale string ("en-US", "ko", None) maps onto a supported Locale
LocaleField = Annotated[Locale, BeforeValidator(Locale.coerce)]
EmailField = Annotated[str, AfterValidator(_check_email)]
RequiredText = Annotated[str, AfterValidator(_strip_required)]
