"""Shared validation utilities"""

import re
from typing import Optional

from ..security_utils import password_problems

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9]{4,}$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
ZIP_PATTERN = re.compile(r"^\d{5}$")

ACCEPTED_PRIMARIES = {
    "St.", "St", "Street",
    "Ave.", "Av.", "Ave", "Avenue",
    "Parkway", "Pkwy", "Pkwy.",
    "Dr.", "Dr", "Drive",
    "Ln", "Lane", "Ln.",
}

ACCEPTED_SECONDARIES = {
    "Apt", "Apt.", "Ste", "Ste.", "Suite", "Apartment", "#",
    "Pt.", "No.", "No", "Unit", "Ut", "Un.", "Un", "Ut.",
}


def validate_us_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize US phone number to E.164 format.

    Returns:
        Normalized phone number in E.164 format (+1XXXXXXXXXX)

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    digits = re.sub(r"\D", "", phone)

    if digits.startswith("1") and len(digits) == 11:
        digits = digits[1:]

    if len(digits) != 10:
        raise ValueError("Phone number must be 10 digits for US numbers")

    return f"+1{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")

    return email


def validate_username(username: str) -> str:
    username = username.strip()
    if not USERNAME_PATTERN.match(username):
        raise ValueError("Username must be at least 4 letters or numbers")
    return username


def validate_password(password: str) -> str:
    problems = password_problems(password)
    if problems:
        raise ValueError(problems[0])
    return password


def validate_primary_address(address: str) -> str:
    """
    A street address such as "123 Main St." - the street suffix must be the
    last or second-to-last word (the latter allows "5 Oak Ave NW").
    """
    address = " ".join(address.split())
    if " " not in address:
        raise ValueError("Address must include a street number and name")

    words = address.split(" ")
    if words[-1] in ACCEPTED_PRIMARIES or words[-2] in ACCEPTED_PRIMARIES:
        return address

    raise ValueError("Address must end with a street type such as St., Ave or Dr")


def validate_secondary_address(address: Optional[str]) -> Optional[str]:
    """Apartment or suite line; blank is allowed"""
    if not address:
        return None

    address = " ".join(address.split())
    if not 3 <= len(address) <= 15:
        raise ValueError("Secondary address must be between 3 and 15 characters")

    first = address.split(" ")[0]
    if first not in ACCEPTED_SECONDARIES:
        raise ValueError("Secondary address must start with Apt, Ste, Suite, Unit or #")

    return address


def validate_city(city: str) -> str:
    city = city.strip()
    if not 2 <= len(city) <= 28:
        raise ValueError("City must be between 2 and 28 characters")
    return city


def validate_zip(zip_code: str) -> str:
    zip_code = zip_code.strip()
    if not ZIP_PATTERN.match(zip_code):
        raise ValueError("Zip code must be 5 digits")
    return zip_code


def validate_state_code(state: str) -> str:
    state = state.strip().upper()
    if not re.match(r"^[A-Z]{2}$", state):
        raise ValueError("State must be a two letter code")
    return state


def blank_to_none(value):
    """HTML forms post empty strings for untouched fields"""
    if isinstance(value, str) and value.strip() == "":
        return None
    return value
