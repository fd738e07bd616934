"""
Unit tests for the pydantic wire models and cart dataclasses.
"""

import pytest
from decimal import Decimal
from pydantic import ValidationError

from core.exceptions import InputValidationError
from core.validation import parse_or_raise
from models.cart import Cart, CartLine
from models.inquiry import InquiryCreate, InquiryType
from models.order import CheckoutForm, OrderCreate, OrderItem
from models.product import Product, ProductList


class TestProduct:

    def test_parses_camel_case_record(self, raw_products):
        product = Product.model_validate(raw_products[0])

        assert product.is_featured is True
        assert product.grade == "W320"
        assert product.price == Decimal("1200.00")

    def test_to_dict_is_camel_case_with_string_price(self, raw_products):
        data = Product.model_validate(raw_products[0]).to_dict()

        assert data["isFeatured"] is True
        assert data["price"] == "1200.00"
        assert "is_featured" not in data

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product(id="x", name="X", price=Decimal("-1"), category="raw")

    def test_product_list(self, raw_products):
        assert len(ProductList.validate_python(raw_products)) == 8

    def test_primary_image(self):
        assert Product(id="x", name="X", price=1, category="raw").primary_image == ""
        assert Product(
            id="x", name="X", price=1, category="raw", images=["/a.png", "/b.png"]
        ).primary_image == "/a.png"


class TestCartModels:

    def test_line_total(self):
        line = CartLine(id="a", name="A", price=Decimal("1200.00"), image="", quantity=25)
        assert line.line_total == Decimal("30000.00")
        assert line.product_id == "a"

    def test_from_dict_rejects_bool_quantity(self):
        with pytest.raises(ValueError):
            CartLine.from_dict({"id": "a", "price": "1", "quantity": True})

    def test_from_dict_rejects_negative_price(self):
        with pytest.raises(ValueError):
            CartLine.from_dict({"id": "a", "price": "-5", "quantity": 25})

    def test_cart_to_dict(self):
        cart = Cart.from_lines([
            CartLine(id="a", name="A", price=Decimal("1200.00"), image="", quantity=25),
            CartLine(id="b", name="B", price=Decimal("1400.00"), image="", quantity=30),
        ])

        data = cart.to_dict()

        assert data["totalItems"] == 55
        assert data["totalPrice"] == "72000.00"
        assert [item["id"] for item in data["items"]] == ["a", "b"]
        assert "b" in cart
        assert cart.get("c") is None


class TestCheckoutForm:

    def test_html_is_stripped(self, checkout_form):
        checkout_form["customerName"] = "<script>alert(1)</script>Asha"
        form = CheckoutForm.model_validate(checkout_form)
        assert "<" not in form.customer_name
        assert form.customer_name.endswith("Asha")

    def test_ampersand_and_angle_bracket_kept_verbatim(self, checkout_form):
        checkout_form["shippingStreet"] = "12 & 14 Main St"
        checkout_form["notes"] = "Pallets < 1000kg & no stacking"

        form = CheckoutForm.model_validate(checkout_form)

        assert form.shipping_street == "12 & 14 Main St"
        assert form.notes == "Pallets < 1000kg & no stacking"

    def test_defaults(self, checkout_form):
        del checkout_form["paymentMethod"]
        checkout_form["customerPhone"] = "   "
        checkout_form["userId"] = ""

        form = CheckoutForm.model_validate(checkout_form)

        assert form.payment_method.value == "card"
        assert form.customer_phone is None
        assert form.user_id == "guest"

    def test_notes_are_truncated(self, checkout_form):
        checkout_form["notes"] = "x" * 1500
        assert len(CheckoutForm.model_validate(checkout_form).notes) == 1000

    def test_unknown_payment_method(self, checkout_form):
        checkout_form["paymentMethod"] = "crypto"
        with pytest.raises(ValidationError):
            CheckoutForm.model_validate(checkout_form)


class TestOrderItem:

    @pytest.mark.parametrize("quantity", [10, 27, 0])
    def test_invalid_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError, match="at least 25kg"):
            OrderItem(product_id="a", quantity=quantity, price=Decimal("1"))

    def test_valid_quantity(self):
        assert OrderItem(product_id="a", quantity=45, price=Decimal("1")).quantity == 45


class TestInquiry:

    def test_special_characters_are_not_escaped(self):
        inquiry = InquiryCreate.model_validate({
            "type": "export",
            "name": "Ravi",
            "email": "ravi@example.com",
            "message": "Need price < 1000 & samples",
            "company": "Smith & Sons",
            "country": "UAE",
        })

        assert inquiry.company == "Smith & Sons"
        assert inquiry.message == "Need price < 1000 & samples"

    def test_contact_inquiry(self):
        inquiry = InquiryCreate.model_validate({
            "type": "contact",
            "name": "Ravi",
            "email": "ravi@example.com",
            "message": "Hello",
            "company": "  ",
        })
        assert inquiry.type == InquiryType.CONTACT
        assert inquiry.company is None

    def test_export_requires_company_and_country(self):
        with pytest.raises(InputValidationError) as exc_info:
            parse_or_raise(InquiryCreate, {
                "type": "export",
                "name": "Ravi",
                "email": "ravi@example.com",
                "message": "Quote for 5 tonnes of W320",
            }, "Invalid inquiry data")

        error = exc_info.value
        assert error.message == "Invalid inquiry data"
        assert error.errors[0]["message"] == "Export inquiries require: company, country"


class TestParseOrRaise:

    def test_passes_instances_through(self, checkout_form):
        form = CheckoutForm.model_validate(checkout_form)
        assert parse_or_raise(CheckoutForm, form) is form

    def test_none_body(self):
        with pytest.raises(InputValidationError) as exc_info:
            parse_or_raise(CheckoutForm, None, "Invalid checkout data")
        assert exc_info.value.errors == [{"field": "__root__", "message": "Request body is required"}]

    def test_nested_field_path(self):
        with pytest.raises(InputValidationError) as exc_info:
            parse_or_raise(OrderCreate, {
                "customerName": "Asha",
                "customerEmail": "asha@example.com",
                "items": [{"productId": "a", "quantity": 27, "price": "1200"}],
                "total": "32400",
                "shippingAddress": {
                    "street": "1 Road", "city": "Kollam", "state": "Kerala",
                    "postalCode": "691001", "country": "India",
                },
            })
        assert exc_info.value.fields == ["items.0.quantity"]
