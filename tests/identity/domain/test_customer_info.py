"""Tests for customer detail capture."""

import pytest
from shared.validation import Invalid, Valid

from identity.customer.customer import Customer, validate_customer_info


class TestValidateCustomerInfo:
    def test_complete_details(self):
        result = validate_customer_info({"name": "Ada", "email": "ada@example.com", "address": "London"})
        assert isinstance(result, Valid)
        assert result.value.name == "Ada"
        assert result.value.email == "ada@example.com"
        assert result.value.address == "London"

    def test_address_is_optional(self):
        result = validate_customer_info({"name": "Ada", "email": "ada@example.com"})
        assert isinstance(result, Valid)
        assert result.value.address is None

    def test_empty_address_becomes_none(self):
        result = validate_customer_info({"name": "Ada", "email": "ada@example.com", "address": ""})
        assert result.value.address is None

    def test_whitespace_is_trimmed(self):
        result = validate_customer_info({"name": " Ada ", "email": " ada@example.com "})
        assert result.value.name == "Ada"
        assert result.value.email == "ada@example.com"

    @pytest.mark.parametrize(
        "fields",
        [
            {"email": "ada@example.com"},
            {"name": "Ada"},
            {"name": "", "email": "ada@example.com"},
            {"name": "Ada", "email": "   "},
            {"name": 42, "email": "ada@example.com"},
        ],
    )
    def test_name_and_email_required(self, fields):
        assert validate_customer_info(fields) == Invalid("Customer name and email are required")

    @pytest.mark.parametrize("email", ["ada@localhost", "not-an-email", "ada@@example.com"])
    def test_any_non_blank_email_is_accepted(self, email):
        result = validate_customer_info({"name": "Ada", "email": email})
        assert isinstance(result, Valid)
        assert result.value.email == email

    def test_non_text_address(self):
        result = validate_customer_info({"name": "Ada", "email": "ada@example.com", "address": ["x"]})
        assert isinstance(result, Invalid)


class TestCustomerRecord:
    def test_every_create_is_a_new_customer(self):
        first = Customer.create(name="Ada", email="ada@example.com")
        second = Customer.create(name="Ada", email="ada@example.com")
        assert first.id != second.id

    def test_created_at_is_utc(self):
        customer = Customer.create(name="Ada", email="ada@example.com")
        assert customer.created_at.tzinfo is not None
