"""Tests for DynamicVars and computed fields."""

import logging

import pytest

from scopevars import DynamicVars, ComputedField, ReadOnlyField, Vars, computed_field


class Cart(DynamicVars):
    @computed_field
    def total(self):
        return sum(self.get("prices", []))

    @computed_field
    def owner(self):
        return self.get("_owner", "nobody")

    @owner.setter
    def owner(self, value):
        Vars.set(self, "_owner", value.strip().title())


class TestComputedFields:
    def test_getter(self):
        cart = Cart()
        cart.set("prices", [1, 2, 3])
        assert cart.get("total") == 6

    def test_getter_recomputes_on_every_read(self):
        cart = Cart()
        cart.set("prices", [1])
        assert cart.get("total") == 1
        cart.set("prices", [1, 1])
        assert cart.get("total") == 2

    def test_read_only_field_raises(self):
        cart = Cart()
        with pytest.raises(ReadOnlyField) as exc:
            cart.set("total", 10)
        assert exc.value.name == "total"
        assert "Cannot reassign to total." in str(exc.value)

    def test_read_only_is_attribute_error(self):
        with pytest.raises(AttributeError):
            Cart().set("total", 10)

    def test_getter_wins_over_stored_entry(self):
        data = {"total": 999, "prices": [5]}
        cart = Cart.wrap(data)
        assert cart.get("total") == 5

    def test_setter_routes_value(self):
        cart = Cart()
        cart.set("owner", "  alice smith ")
        assert cart.get("owner") == "Alice Smith"
        assert cart.get("_owner") == "Alice Smith"

    def test_has(self):
        cart = Cart()
        assert cart.has("total") is True
        assert cart.has("prices") is False
        cart.set("prices", [])
        assert cart.has("prices") is True

    def test_default_passes_through(self):
        cart = Cart(default="?")
        assert cart.get("missing") == "?"
        assert cart.get("missing", 0) == 0

    def test_plain_fields_behave_like_vars(self):
        cart = Cart()
        cart.register_lazy("coupon", lambda owner: "SAVE10")
        assert cart.get("coupon") == "SAVE10"
        cart.remove("coupon")
        assert cart.has("coupon") is False


class TestKeys:
    def test_computed_names_first(self):
        cart = Cart()
        cart.set("prices", [1])
        cart.set("currency", "EUR")
        assert list(cart.keys()) == ["total", "owner", "prices", "currency"]

    def test_items_include_computed(self):
        cart = Cart()
        cart.set("prices", [2, 3])
        assert list(cart.items()) == [
            ("total", 5),
            ("owner", "nobody"),
            ("prices", [2, 3]),
        ]

    def test_to_mapping_includes_computed(self):
        cart = Cart()
        cart.set("prices", [4])
        assert cart.to_mapping() == {"total": 4, "owner": "nobody", "prices": [4]}

    def test_count_is_stored_only(self):
        cart = Cart()
        cart.set("prices", [])
        assert cart.count() == 1

    def test_computed_names(self):
        assert Cart.computed_names() == ["total", "owner"]
        assert DynamicVars.computed_names() == []


class TestInheritance:
    def test_subclass_inherits_fields(self):
        class GiftCart(Cart):
            @computed_field
            def wrapped(self):
                return True

        gift = GiftCart()
        gift.set("prices", [1, 1])
        assert gift.get("total") == 2
        assert gift.get("wrapped") is True
        assert GiftCart.computed_names() == ["total", "owner", "wrapped"]

    def test_subclass_overrides_field(self):
        class TaxedCart(Cart):
            @computed_field
            def total(self):
                return sum(self.get("prices", [])) * 2

        taxed = TaxedCart()
        taxed.set("prices", [5])
        assert taxed.get("total") == 10
        assert Cart.computed_names() == ["total", "owner"]

    def test_subclass_can_make_field_writable(self):
        class EditableCart(Cart):
            @computed_field
            def total(self):
                return self.get("_total", 0)

            @total.setter
            def total(self, value):
                Vars.set(self, "_total", value)

        cart = EditableCart()
        cart.set("total", 7)
        assert cart.get("total") == 7

    def test_plain_attribute_shadows_field(self):
        class PlainCart(Cart):
            total = None

        assert PlainCart.computed_names() == ["owner"]
        cart = PlainCart()
        cart.set("total", 3)
        assert cart.get("total") == 3

    def test_registry_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="scopevars.dynamic"):

            class Logged(DynamicVars):
                @computed_field
                def answer(self):
                    return 42

        assert "Registered computed fields for Logged: answer" in caplog.text


class TestAttributeAccess:
    def test_attribute_read_goes_through_get(self):
        cart = Cart()
        cart.set("prices", [1, 2])
        assert cart.total == 3

    def test_attribute_write_goes_through_set(self):
        cart = Cart()
        cart.owner = "bob"
        assert cart.get("owner") == "Bob"
        with pytest.raises(ReadOnlyField):
            cart.total = 1

    def test_class_access_returns_field(self):
        assert isinstance(Cart.total, ComputedField)
        assert Cart.total.read_only is True
        assert Cart.owner.read_only is False
        assert repr(Cart.owner) == "ComputedField(owner, read-write)"
