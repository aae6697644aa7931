"""
Yolomy Products Backend — Product Repository Tests
===================================================

What:  Tests for ProductRepository against an in-memory (mongomock) database.

What we test:
    ✅ create assigns an id and list_all returns the created record
    ✅ delete_by_id succeeds once, then reports not-found
    ✅ never-assigned ids are not-found, malformed ids are ValidationError
    ✅ list_all on an empty collection is an empty list
    ✅ driver failures surface as DatabaseError
"""

import asyncio
from unittest.mock import patch

import pytest
from bson import ObjectId

from yolomy.exceptions import DatabaseError, ValidationError
from yolomy.schemas.product import ProductCreate
from yolomy.services.product_repository import ProductRepository, parse_object_id


class TestParseObjectId:
    def test_valid_hex_string(self):
        assert parse_object_id("000000000000000000000000") == ObjectId("0" * 24)

    @pytest.mark.parametrize("identifier", ["", "abc", "not-an-object-id", "z" * 24])
    def test_malformed_identifier_rejected(self, identifier):
        with pytest.raises(ValidationError, match="not a valid product identifier"):
            parse_object_id(identifier)


class TestProductRepositoryCreate:
    @pytest.mark.asyncio
    async def test_create_assigns_identifier(self, repository, product_fields):
        product = await repository.create(product_fields)

        assert product.id is not None
        assert product.name == "Widget"
        assert product.quantity == 5
        assert product.price == 9.99

    @pytest.mark.asyncio
    async def test_create_then_list_includes_record(self, repository, product_fields):
        created = await repository.create(product_fields)

        products = await repository.list_all()

        assert [str(p.id) for p in products] == [str(created.id)]
        assert products[0].description == "A widget"
        assert products[0].category == "tools"

    @pytest.mark.asyncio
    async def test_create_embeds_image(self, repository, product_fields, sample_image_bytes):
        created = await repository.create(product_fields)

        stored = await repository.get_by_id(str(created.id))

        assert stored.image.filename == "widget.png"
        assert stored.image.content_type == "image/png"
        assert stored.image.size == len(sample_image_bytes)
        assert bytes(stored.image.data) == sample_image_bytes

    @pytest.mark.asyncio
    async def test_create_without_optional_fields(self, repository):
        fields = ProductCreate(name="Bare", quantity=0, price=0)

        created = await repository.create(fields)
        stored = await repository.get_by_id(str(created.id))

        assert stored.description is None
        assert stored.category is None
        assert stored.image is None

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_distinct_ids(self, repository, product_fields):
        first, second = await asyncio.gather(
            repository.create(product_fields),
            repository.create(product_fields),
        )

        assert first.id != second.id
        assert len(await repository.list_all()) == 2


class TestProductRepositoryList:
    @pytest.mark.asyncio
    async def test_list_empty_collection(self, repository):
        assert await repository.list_all() == []


class TestProductRepositoryDelete:
    @pytest.mark.asyncio
    async def test_delete_succeeds_exactly_once(self, repository, product_fields):
        created = await repository.create(product_fields)
        identifier = str(created.id)

        deleted = await repository.delete_by_id(identifier)
        again = await repository.delete_by_id(identifier)

        assert deleted is not None
        assert str(deleted.id) == identifier
        assert deleted.name == "Widget"
        assert again is None
        assert await repository.list_all() == []

    @pytest.mark.asyncio
    async def test_delete_never_assigned_id_is_not_found(self, repository):
        assert await repository.delete_by_id("000000000000000000000000") is None

    @pytest.mark.asyncio
    async def test_delete_malformed_id_raises_validation_error(self, repository):
        with pytest.raises(ValidationError):
            await repository.delete_by_id("12345")

    @pytest.mark.asyncio
    async def test_delete_leaves_other_products(self, repository, product_fields):
        keep = await repository.create(product_fields)
        drop = await repository.create(product_fields)

        await repository.delete_by_id(str(drop.id))

        remaining = await repository.list_all()
        assert [str(p.id) for p in remaining] == [str(keep.id)]


class TestProductRepositoryGet:
    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, repository):
        assert await repository.get_by_id(str(ObjectId())) is None

    @pytest.mark.asyncio
    async def test_get_malformed_id_raises_validation_error(self, repository):
        with pytest.raises(ValidationError):
            await repository.get_by_id("bad")


class TestProductRepositoryFailures:
    @pytest.mark.asyncio
    async def test_list_on_closed_connection_raises_database_error(self, database):
        repository = ProductRepository(database)
        database.close()

        with pytest.raises(DatabaseError) as exc_info:
            await repository.list_all()

        assert exc_info.value.context["operation"] == "list"

    @pytest.mark.asyncio
    async def test_unreachable_server_raises_database_error(self, unreachable_database):
        repository = ProductRepository(unreachable_database)

        with pytest.raises(DatabaseError) as exc_info:
            await repository.list_all()

        assert exc_info.value.context["error_type"] == "ServerSelectionTimeoutError"

    @pytest.mark.asyncio
    async def test_insert_failure_raises_database_error(self, repository, product_fields):
        with patch.object(
            repository, "_collection", side_effect=RuntimeError("disk full")
        ):
            with pytest.raises(DatabaseError) as exc_info:
                await repository.create(product_fields)

        assert exc_info.value.context["original_error"] == "disk full"
