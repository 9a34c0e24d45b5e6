"""Unit tests for ProductDjangoRepository.

Covers:
- Filter spec -> Q translation and ordering arguments.
- Reads (get_all, get_by_id, exists, search, category, brand, count).
- get_paged: count independent of the window, stable tie-break.
- Writes (create, update, soft delete) and their change flags.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from decimal import Decimal

import pytest
from django.db.models import Q
from django.utils import timezone

from modules.products.models import Product
from modules.products.query import (
    AnyOf,
    FilterCondition,
    Operator,
    QueryPlan,
    SortSpec,
)
from modules.products.repositories.django_repository import (
    ProductDjangoRepository,
    order_by_args,
    to_q,
)
from modules.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


def _make_product(**overrides) -> Product:
    defaults = {
        "name": "Widget",
        "price": Decimal("19.99"),
        "stock_quantity": 10,
        "created_at": timezone.now(),
    }
    defaults.update(overrides)
    return Product.objects.create(**defaults)


class TestSpecTranslation:
    def test_condition_to_q(self):
        q = to_q(FilterCondition("price", Operator.GTE, Decimal("5")))
        assert q == Q(price__gte=Decimal("5"))

    def test_any_of_is_ored(self):
        q = to_q(
            AnyOf(
                (
                    FilterCondition("name", Operator.ICONTAINS, "a"),
                    FilterCondition("brand", Operator.ICONTAINS, "a"),
                )
            )
        )
        assert q == Q(name__icontains="a") | Q(brand__icontains="a")

    def test_order_by_args(self):
        assert order_by_args(SortSpec("price", True)) == ("-price", "id")
        assert order_by_args(SortSpec("name", False)) == ("name", "id")


class TestRepositoryInstantiation:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, IProductRepository)


class TestReads:
    def test_get_all_returns_active_by_name(self, repo):
        b = _make_product(name="B")
        a = _make_product(name="A")
        _make_product(name="C", is_active=False)
        assert repo.get_all() == [a, b]

    def test_get_by_id_includes_inactive(self, repo):
        product = _make_product(is_active=False)
        assert repo.get_by_id(product.id) == product

    def test_get_by_id_missing(self, repo):
        assert repo.get_by_id(999999) is None

    def test_exists(self, repo):
        product = _make_product()
        assert repo.exists(product.id) is True
        assert repo.exists(product.id + 1000) is False

    def test_search_matches_text_fields_and_category(self, repo):
        by_name = _make_product(name="Rug Deluxe")
        by_description = _make_product(name="Mat", description="A rug-like mat")
        by_category = _make_product(name="Carpet", category="Rugs")
        _make_product(name="Rug Old", is_active=False)
        _make_product(name="Pillow")
        assert set(repo.search("rug")) == {by_name, by_description, by_category}

    def test_search_blank_is_empty(self, repo):
        _make_product()
        assert repo.search("   ") == []

    def test_get_by_category_is_substring_and_case_insensitive(self, repo):
        decor = _make_product(category="Home Decor")
        _make_product(category="Bath")
        _make_product(category="Seasonal Decor", is_active=False)
        assert repo.get_by_category("decor") == [decor]

    def test_get_by_brand(self, repo):
        comfy = _make_product(brand="ComfyHome")
        _make_product(brand=None)
        assert repo.get_by_brand("comfy") == [comfy]

    def test_get_count_counts_active_only(self, repo):
        _make_product()
        _make_product()
        _make_product(is_active=False)
        assert repo.get_count() == 2


class TestGetPaged:
    def test_total_count_ignores_window(self, repo):
        for i in range(7):
            _make_product(name=f"P{i}")
        items, total = repo.get_paged(QueryPlan(page_number=2, page_size=3))
        assert total == 7
        assert [p.name for p in items] == ["P3", "P4", "P5"]

    def test_page_past_end_is_empty(self, repo):
        _make_product()
        items, total = repo.get_paged(QueryPlan(page_number=5, page_size=10))
        assert items == []
        assert total == 1

    def test_ties_break_on_id(self, repo):
        same = [_make_product(name="Same", price=Decimal("5")) for _ in range(4)]
        plan = QueryPlan(sort=SortSpec("price", True), page_size=2)
        first, _ = repo.get_paged(plan)
        second, _ = repo.get_paged(
            QueryPlan(sort=SortSpec("price", True), page_number=2, page_size=2)
        )
        assert first + second == same

    def test_null_columns_never_match_substring(self, repo):
        _make_product(brand=None)
        plan = QueryPlan(filters=(FilterCondition("brand", Operator.ICONTAINS, ""),))
        _, total = repo.get_paged(plan)
        assert total == 0


class TestWrites:
    def test_create_assigns_id(self, repo):
        product = Product(
            name="New", price=Decimal("3.00"), created_at=timezone.now()
        )
        saved = repo.create(product)
        assert saved.id is not None
        assert Product.objects.filter(id=saved.id).exists()

    def test_create_logs_once(self, repo, caplog):
        product = Product(name="New", price=Decimal("3.00"), created_at=timezone.now())
        with caplog.at_level(logging.INFO):
            repo.create(product)
        messages = [r.getMessage() for r in caplog.records]
        assert sum("product_created" in m for m in messages) == 1
        assert not any("product.saved" in m for m in messages)

    def test_update_overwrites_mutable_columns(self, repo):
        existing = _make_product(name="Old")
        created_at = existing.created_at
        replacement = Product(
            id=existing.id,
            name="New",
            price=Decimal("7.50"),
            stock_quantity=1,
            is_active=False,
            created_at=created_at - timedelta(days=30),
            updated_at=timezone.now(),
        )
        updated = repo.update(replacement)
        assert updated.name == "New"
        assert updated.price == Decimal("7.50")
        assert updated.is_active is False
        assert updated.created_at == created_at
        assert updated.updated_at is not None

    def test_update_missing_returns_none(self, repo):
        ghost = Product(id=424242, name="Ghost", price=Decimal("1"))
        assert repo.update(ghost) is None

    def test_delete_is_soft(self, repo):
        product = _make_product()
        assert repo.delete(product.id) is True
        product.refresh_from_db()
        assert product.is_active is False
        assert product.updated_at is not None

    def test_delete_missing_returns_false(self, repo):
        assert repo.delete(424242) is False
