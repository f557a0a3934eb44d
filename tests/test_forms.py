"""Tests for checkout and contact form validation"""
from storefront.cart import Cart
from storefront.errors import ERROR_EMPTY_CART, ERROR_INVALID_EMAIL, ERROR_INVALID_PHONE
from storefront.forms import (
    BillingDetails,
    ContactDetails,
    ContactRequest,
    OrderRequest,
    is_valid_email,
    is_valid_phone,
)
from storefront.notifications import NotificationKind


def filled_billing(**overrides) -> BillingDetails:
    data = {
        "first_name": "Mona",
        "last_name": "Adel",
        "address": "12 Corniche St",
        "phone": "+20 (100) 123-4567",
        "building": "12",
        "apartment": "4",
    }
    data.update(overrides)
    return BillingDetails(**data)


def rose_cart() -> Cart:
    return Cart.from_list([{"name": "Rose", "price": "100", "quantity": 2}])


def test_phone_pattern():
    assert is_valid_phone("+20 (100) 123-4567")
    assert is_valid_phone("01001234567")
    assert not is_valid_phone("call me")
    assert not is_valid_phone("++20")


def test_email_pattern():
    assert is_valid_email("mona@example.com")
    assert not is_valid_email("mona@example")
    assert not is_valid_email("mona example@x.com")


def test_whitespace_is_trimmed():
    billing = BillingDetails(first_name="  Mona  ")
    billing.last_name = " Adel "

    assert billing.first_name == "Mona"
    assert billing.full_name == "Mona Adel"


def test_valid_billing_passes():
    assert filled_billing().validate_for(rose_cart()) is None


def test_missing_fields_warning_lists_labels():
    issue = BillingDetails(first_name="Mona", phone="0100").validate_for(rose_cart())

    assert issue.kind is NotificationKind.WARNING
    assert issue.missing_fields == ("Last Name", "Address", "Building Number", "Apartment Number")
    assert issue.message == (
        "Please fill in the following required fields: "
        "Last Name, Address, Building Number, Apartment Number"
    )


def test_whitespace_only_counts_as_missing():
    issue = filled_billing(address="   ").validate_for(rose_cart())

    assert issue.missing_fields == ("Address",)


def test_empty_cart_is_error():
    issue = filled_billing().validate_for(Cart())

    assert issue.kind is NotificationKind.ERROR
    assert issue.message == ERROR_EMPTY_CART


def test_invalid_phone_checked_first():
    issue = BillingDetails(phone="not a phone").validate_for(Cart())

    assert issue.message == ERROR_INVALID_PHONE


def test_reset_clears_fields():
    billing = filled_billing()

    billing.reset()

    assert billing.missing_fields() == list(BillingDetails.REQUIRED_LABELS.values())


def test_order_payload_uses_api_field_names():
    payload = OrderRequest.build(filled_billing(), rose_cart()).to_payload()

    assert payload["fName"] == "Mona"
    assert payload["lName"] == "Adel"
    assert payload["adress"] == "12 Corniche St"
    assert payload["apart"] == "4"
    assert payload["building"] == "12"
    assert payload["cart"] == [{"name": "Rose", "price": "100", "quantity": 2}]


def test_contact_validation_order():
    details = ContactDetails(name="Mona", email="bad", phone="abc", message="Hi")

    assert details.validate_form().message == ERROR_INVALID_EMAIL

    details.email = "mona@example.com"
    assert details.validate_form().message == ERROR_INVALID_PHONE

    details.phone = "0100"
    assert details.validate_form() is None


def test_contact_missing_fields():
    issue = ContactDetails().validate_form()

    assert issue.kind is NotificationKind.WARNING
    assert issue.missing_fields == ("Name", "Email", "Phone", "Message")


def test_contact_payload():
    details = ContactDetails(name="Mona", email="mona@example.com", phone="0100", message=" Hello ")

    assert ContactRequest.build(details).to_payload() == {
        "name": "Mona",
        "email": "mona@example.com",
        "phone": "0100",
        "message": "Hello",
    }
