"""Field validators shared by the entity forms."""

from __future__ import annotations

import pytest

from extrev.security_utils import password_problems
from extrev.shared.validators import (
    blank_to_none,
    validate_city,
    validate_email,
    validate_primary_address,
    validate_secondary_address,
    validate_state_code,
    validate_us_phone,
    validate_username,
    validate_zip,
)


@pytest.mark.parametrize(
    "address",
    ["123 Main St.", "9 Elm Avenue", "5 Oak Ave NW", "100 Lakeshore Pkwy", "7   Birch   Ln"],
)
def test_primary_address_accepts_street_suffixes(address: str) -> None:
    assert validate_primary_address(address) == " ".join(address.split())


@pytest.mark.parametrize("address", ["Main", "123 Main Road", "123 Main Blvd"])
def test_primary_address_rejects_unknown_suffix(address: str) -> None:
    with pytest.raises(ValueError):
        validate_primary_address(address)


def test_secondary_address_rules() -> None:
    assert validate_secondary_address("Apt 4") == "Apt 4"
    assert validate_secondary_address("# 12") == "# 12"
    assert validate_secondary_address("") is None

    with pytest.raises(ValueError):
        validate_secondary_address("Floor 2")
    with pytest.raises(ValueError):
        validate_secondary_address("Suite 1234567890")


def test_phone_is_normalised() -> None:
    assert validate_us_phone("(617) 555-0100") == "+16175550100"
    assert validate_us_phone("1-617-555-0100") == "+16175550100"
    assert validate_us_phone(None) is None

    with pytest.raises(ValueError):
        validate_us_phone("555-0100")


def test_email_is_lowercased() -> None:
    assert validate_email(" Alice@Example.COM ") == "alice@example.com"

    with pytest.raises(ValueError):
        validate_email("alice@")


def test_username_requires_four_alphanumerics() -> None:
    assert validate_username("alice1") == "alice1"

    for bad in ("abc", "alice!", "al ce"):
        with pytest.raises(ValueError):
            validate_username(bad)


def test_zip_city_and_state() -> None:
    assert validate_zip("02110") == "02110"
    assert validate_city(" Boston ") == "Boston"
    assert validate_state_code("ma") == "MA"

    with pytest.raises(ValueError):
        validate_zip("2110")
    with pytest.raises(ValueError):
        validate_city("B")
    with pytest.raises(ValueError):
        validate_state_code("Mass")


def test_password_problems_lists_every_rule() -> None:
    """Each broken rule is reported, in order."""

    assert password_problems("Secret123!") == []
    assert password_problems("abc") == [
        "Password must be at least 8 characters long",
        "Password must contain an uppercase letter",
        "Password must contain a number",
        "Password must contain one of @$!%*?&",
    ]
    assert "Password must not contain whitespace" in password_problems("Secret 123!")


def test_blank_form_values_become_none() -> None:
    assert blank_to_none("   ") is None
    assert blank_to_none("x") == "x"
    assert blank_to_none(3) == 3
