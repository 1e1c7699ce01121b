"""Addressing value objects validated at construction time."""

import re
from dataclasses import dataclass, field
from typing import Optional

COUNTRY_CODE_PATTERN = re.compile(r"[0-9]{1,3}")
AREA_CODE_PATTERN = re.compile(r"[0-9]{2,3}")
SUBSCRIBER_NUMBER_PATTERN = re.compile(r"[0-9]{7,9}")
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


@dataclass(frozen=True)
class PhoneNumber:
    """Phone number split into country code, area code and subscriber number.

    Equality and hashing use the canonical ``+<country><area><number>`` form.

    Example:
        phone = PhoneNumber("1", "581", "5551234")
        phone.full_number  # "+15815551234"

    Raises:
        ValueError: If any component is missing or has the wrong digit count
    """

    country_code: str = field(compare=False)
    area_code: str = field(compare=False)
    number: str = field(compare=False)
    full_number: str = field(init=False)

    def __post_init__(self):
        _check_component("country_code", self.country_code, COUNTRY_CODE_PATTERN)
        _check_component("area_code", self.area_code, AREA_CODE_PATTERN)
        _check_component("number", self.number, SUBSCRIBER_NUMBER_PATTERN)
        object.__setattr__(
            self,
            "full_number",
            f"+{self.country_code}{self.area_code}{self.number}",
        )

    @classmethod
    def parse(
        cls, value: str, country_code: str = "1", area_code_length: int = 3
    ) -> "PhoneNumber":
        """Split an E.164 string into a PhoneNumber.

        Args:
            value: Number such as "+15815551234"; the leading "+" is optional
            country_code: Country code the number is expected to start with
            area_code_length: Digits of area code following the country code

        Raises:
            ValueError: If the value does not start with the country code or
                the remaining digits do not form a valid number
        """
        if not value or not value.strip():
            raise ValueError("Phone number is required")
        digits = value.strip()
        if digits.startswith("+"):
            digits = digits[1:]
        if not digits.isdigit() or not digits.startswith(country_code):
            raise ValueError(
                f"Phone number must start with +{country_code}: {value}"
            )
        rest = digits[len(country_code):]
        return cls(country_code, rest[:area_code_length], rest[area_code_length:])

    def __str__(self) -> str:
        return self.full_number


def _check_component(name: str, value: Optional[str], pattern: re.Pattern) -> None:
    if not isinstance(value, str) or not pattern.fullmatch(value):
        raise ValueError(f"Invalid phone number {name}: {value!r}")


@dataclass(frozen=True)
class EmailAddress:
    """Trimmed, lower-cased email address.

    Raises:
        ValueError: For blank or malformed input
    """

    address: str

    def __post_init__(self):
        if self.address is None or not str(self.address).strip():
            raise ValueError("Email address is required")
        normalized = str(self.address).strip().lower()
        if not EMAIL_PATTERN.fullmatch(normalized):
            raise ValueError(f"Invalid email address: {self.address!r}")
        object.__setattr__(self, "address", normalized)

    def __str__(self) -> str:
        return self.address
