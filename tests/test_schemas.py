"""Unit tests for request schemas: strict types, unknown keys and partial-update semantics."""

import unittest

from pydantic import ValidationError

from storefront.schemas.branches import BranchCreate, BranchUpdate
from storefront.schemas.products import ProductCreate, ProductImageUpload, ProductUpdate
from storefront.schemas.store_settings import SettingsUpdate
from storefront.schemas.users import UserCreate, UserUpdate


class TestProductSchemas(unittest.TestCase):
    def test_defaults(self) -> None:
        product = ProductCreate(name="Mug", price_cents=1500)
        self.assertEqual(product.stock, 0)
        self.assertEqual(product.is_active, 1)
        self.assertIsNone(product.description)

    def test_price_must_be_integer_cents(self) -> None:
        for bad in (12.5, "1500", True, -1):
            with self.subTest(price_cents=bad):
                with self.assertRaises(ValidationError):
                    ProductCreate(name="Mug", price_cents=bad)

    def test_amounts_capped_at_integer_column_range(self) -> None:
        self.assertEqual(ProductCreate(name="Mug", price_cents=2_147_483_647).price_cents, 2_147_483_647)
        with self.assertRaises(ValidationError):
            ProductCreate(name="Mug", price_cents=2_147_483_648)
        with self.assertRaises(ValidationError):
            ProductCreate(name="Mug", price_cents=1, stock=10**20)
        with self.assertRaises(ValidationError):
            ProductUpdate(price_cents=10**20)

    def test_is_active_is_a_zero_one_flag(self) -> None:
        with self.assertRaises(ValidationError):
            ProductCreate(name="Mug", price_cents=1, is_active=2)
        with self.assertRaises(ValidationError):
            ProductCreate(name="Mug", price_cents=1, is_active=True)

    def test_unknown_keys_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            ProductCreate.model_validate({"name": "Mug", "price_cents": 1, "id": "x"})

    def test_blank_description_clears(self) -> None:
        self.assertIsNone(ProductCreate(name="Mug", price_cents=1, description="   ").description)

    def test_update_change_set_only_has_sent_fields(self) -> None:
        patch = ProductUpdate.model_validate({"stock": 3, "description": None})
        self.assertEqual(patch.changes(), {"stock": 3, "description": None})
        self.assertEqual(ProductUpdate.model_validate({}).changes(), {})

    def test_update_rejects_null_for_required_column(self) -> None:
        with self.assertRaises(ValidationError):
            ProductUpdate.model_validate({"name": None})
        with self.assertRaises(ValidationError):
            ProductUpdate.model_validate({"price_cents": None})

    def test_empty_image_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            ProductImageUpload(product_id="p", content=b"")
        self.assertEqual(ProductImageUpload(product_id="p", content=b"abc").bytes_size, 3)


class TestBranchSchemas(unittest.TestCase):
    def test_phone_checked(self) -> None:
        self.assertEqual(BranchCreate(name="Centro", phone="55 1234 5678").phone, "55 1234 5678")
        with self.assertRaises(ValidationError):
            BranchCreate(name="Centro", phone="call me")

    def test_blank_phone_clears(self) -> None:
        patch = BranchUpdate.model_validate({"phone": ""})
        self.assertEqual(patch.changes(), {"phone": None})


class TestSettingsSchema(unittest.TestCase):
    def test_six_digit_hex_only(self) -> None:
        self.assertEqual(SettingsUpdate(accent_color="#ff8800").accent_color, "#ff8800")
        for bad in ("#f80", "ff8800", "#ff880"):
            with self.subTest(accent_color=bad):
                with self.assertRaises(ValidationError):
                    SettingsUpdate(accent_color=bad)

    def test_currency_is_closed_set(self) -> None:
        self.assertEqual(SettingsUpdate(currency="USD").currency, "USD")
        with self.assertRaises(ValidationError):
            SettingsUpdate(currency="GBP")

    def test_store_name_cannot_be_null(self) -> None:
        with self.assertRaises(ValidationError):
            SettingsUpdate.model_validate({"store_name": None})

    def test_whatsapp_can_be_cleared(self) -> None:
        self.assertEqual(SettingsUpdate.model_validate({"default_whatsapp": ""}).changes(), {"default_whatsapp": None})
        self.assertEqual(SettingsUpdate.model_validate({"default_whatsapp": None}).changes(), {"default_whatsapp": None})


class TestUserSchemas(unittest.TestCase):
    def test_email_validated(self) -> None:
        with self.assertRaises(ValidationError):
            UserCreate(email="nope", password="x")

    def test_role_is_admin_or_editor(self) -> None:
        self.assertEqual(UserCreate(email="a@b.co", password="x").role, "admin")
        self.assertEqual(UserCreate(email="a@b.co", password="x", role="editor").role, "editor")
        with self.assertRaises(ValidationError):
            UserCreate(email="a@b.co", password="x", role="owner")

    def test_password_cannot_be_nulled(self) -> None:
        with self.assertRaises(ValidationError):
            UserUpdate.model_validate({"password": None})
        self.assertEqual(UserUpdate.model_validate({"name": None}).changes(), {"name": None})
