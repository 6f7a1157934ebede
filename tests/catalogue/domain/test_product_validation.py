"""Tests for product creation rules."""

import pytest
from shared.validation import Invalid, Valid

from catalogue.product.product import DEFAULT_IMAGE, Product, validate_new_product


def _fields(**overrides):
    defaults = {"name": "Buckets", "price": 29.99, "description": "Scalable storage", "stock": 50}
    defaults.update(overrides)
    return defaults


class TestValidNewProduct:
    def test_all_fields_present(self):
        result = validate_new_product(_fields())
        assert isinstance(result, Valid)
        assert result.value.name == "Buckets"
        assert result.value.price == 29.99
        assert result.value.stock == 50
        assert result.value.image is None

    def test_zero_stock_is_allowed(self):
        result = validate_new_product(_fields(stock=0))
        assert isinstance(result, Valid)
        assert result.value.stock == 0

    def test_integer_price_becomes_float(self):
        result = validate_new_product(_fields(price=30))
        assert result.value.price == 30.0
        assert isinstance(result.value.price, float)

    def test_image_is_kept(self):
        result = validate_new_product(_fields(image="/images/buckets.jpg"))
        assert result.value.image == "/images/buckets.jpg"

    def test_blank_image_is_dropped(self):
        result = validate_new_product(_fields(image="   "))
        assert result.value.image is None

    def test_name_and_description_are_trimmed(self):
        result = validate_new_product(_fields(name="  Buckets ", description=" Storage  "))
        assert result.value.name == "Buckets"
        assert result.value.description == "Storage"


class TestMissingFields:
    @pytest.mark.parametrize("missing", ["name", "price", "description", "stock"])
    def test_missing_field(self, missing):
        fields = _fields()
        del fields[missing]
        result = validate_new_product(fields)
        assert result == Invalid("All fields are required")

    @pytest.mark.parametrize("field", ["name", "description"])
    def test_blank_text_counts_as_missing(self, field):
        result = validate_new_product(_fields(**{field: "  "}))
        assert result == Invalid("All fields are required")

    def test_zero_price_counts_as_missing(self):
        result = validate_new_product(_fields(price=0))
        assert result == Invalid("All fields are required")

    def test_empty_body(self):
        assert validate_new_product({}) == Invalid("All fields are required")


class TestMalformedFields:
    def test_negative_price(self):
        result = validate_new_product(_fields(price=-1))
        assert isinstance(result, Invalid)
        assert "Price" in result.message

    def test_negative_stock(self):
        result = validate_new_product(_fields(stock=-3))
        assert isinstance(result, Invalid)
        assert "Stock" in result.message

    def test_fractional_stock(self):
        result = validate_new_product(_fields(stock=2.5))
        assert isinstance(result, Invalid)

    def test_boolean_stock(self):
        result = validate_new_product(_fields(stock=True))
        assert isinstance(result, Invalid)

    def test_text_price(self):
        result = validate_new_product(_fields(price="cheap"))
        assert isinstance(result, Invalid)


class TestProductRecord:
    def test_create_assigns_id_and_timestamps(self):
        product = Product.create(name="Buckets", price=29.99, description="Storage", stock=5)
        assert product.id
        assert product.created_at is not None
        assert product.created_at.tzinfo is not None
        assert product.updated_at == product.created_at

    def test_create_defaults_image(self):
        product = Product.create(name="Buckets", price=29.99, description="Storage", stock=5)
        assert product.image == DEFAULT_IMAGE

    def test_create_keeps_explicit_id(self):
        product = Product.create(name="Buckets", price=29.99, description="Storage", stock=5, id="1")
        assert product.id == "1"

    def test_ids_are_unique(self):
        first = Product.create(name="A", price=1, description="a", stock=1)
        second = Product.create(name="B", price=1, description="b", stock=1)
        assert first.id != second.id

    def test_with_stock_returns_a_copy(self):
        product = Product.create(name="Buckets", price=29.99, description="Storage", stock=5)
        updated = product.with_stock(2)
        assert updated.stock == 2
        assert product.stock == 5
        assert updated.id == product.id
