"""
Yolomy Products Backend — Product Repository
=============================================

What:  Typed view over the `products` collection: list, create, fetch and
       delete. Each method issues exactly one database operation.
How:   Wraps the mongoengine `Product` document in querysets built on the
       injected connection handle's collection. The ODM is blocking, so each call
       runs in Starlette's thread pool and the event loop keeps serving other
       requests while the driver waits on the network.
Who:   Constructed per request by the products routes (see
       `get_product_repository`).

Error Translation:
    pymongo / mongoengine failure   → DatabaseError (500)
    malformed ObjectId              → ValidationError (400)
    no matching document            → None (routes turn this into 404)
"""

import logging
from typing import List, Optional

from bson import ObjectId
from fastapi import Depends
from mongoengine.queryset import QuerySet
from pymongo.collection import Collection
from starlette.concurrency import run_in_threadpool

from yolomy.database import DatabaseConnection, get_database
from yolomy.exceptions import DatabaseError, ValidationError, YolomyError
from yolomy.models.product import Product, ProductImage
from yolomy.schemas.product import ProductCreate

logger = logging.getLogger(__name__)


def parse_object_id(identifier: str) -> ObjectId:
    """
    Convert a path identifier into an ObjectId.

    Raises:
        ValidationError: identifier is not 24 hex characters.
    """
    if not ObjectId.is_valid(identifier):
        raise ValidationError(
            message=f"'{identifier}' is not a valid product identifier",
            field="id",
        )
    return ObjectId(identifier)


class ProductRepository:
    """
    Data access for products through one connection handle.

    Responsibilities:
        - list_all():     every stored product, natural order
        - create():       insert one product, return it with its id
        - get_by_id():    one product or None
        - delete_by_id(): atomically remove one product, return it or None
    """

    def __init__(self, database: DatabaseConnection):
        self.database = database

    def _collection(self) -> Collection:
        return self.database.collection(Product._get_collection_name())

    def _objects(self) -> QuerySet:
        return QuerySet(Product, self._collection())

    async def _run(self, operation: str, func, *args):
        """Run a blocking ODM call in the thread pool, translating failures."""
        try:
            return await run_in_threadpool(func, *args)
        except YolomyError:
            raise
        except Exception as e:
            logger.error(
                "Database error during %s: %s", operation, str(e), exc_info=True
            )
            raise DatabaseError(
                context={
                    "operation": operation,
                    "error_type": type(e).__name__,
                    "original_error": str(e),
                },
            ) from e

    # ── Operations ────────────────────────────────────────────────────────

    async def list_all(self) -> List[Product]:
        return await self._run("list", lambda: list(self._objects()))

    async def create(self, fields: ProductCreate) -> Product:
        """
        Persist a new product built from validated fields.

        Returns:
            The saved document, `id` populated by the database.

        Raises:
            DatabaseError: the insert failed.
        """
        image = None
        if fields.image is not None:
            image = ProductImage(
                filename=fields.image.filename,
                content_type=fields.image.content_type,
                size=fields.image.size,
                data=fields.image.data,
            )

        product = Product(
            name=fields.name,
            description=fields.description,
            category=fields.category,
            quantity=fields.quantity,
            price=fields.price,
            image=image,
        )

        def insert() -> Product:
            product.validate()
            result = self._collection().insert_one(product.to_mongo())
            product.id = result.inserted_id
            return product

        saved = await self._run("create", insert)
        logger.info("Product created: %s", saved.id)
        return saved

    async def get_by_id(self, identifier: str) -> Optional[Product]:
        object_id = parse_object_id(identifier)
        return await self._run(
            "get", lambda: self._objects().filter(pk=object_id).first()
        )

    async def delete_by_id(self, identifier: str) -> Optional[Product]:
        """
        Remove the product with the given id.

        Returns:
            The removed document, or None when nothing matched.

        Raises:
            ValidationError: identifier is not a well-formed ObjectId.
            DatabaseError: the delete failed.
        """
        object_id = parse_object_id(identifier)
        deleted = await self._run(
            "delete",
            lambda: self._objects().filter(pk=object_id).modify(remove=True),
        )
        if deleted is not None:
            logger.info("Product deleted: %s", identifier)
        return deleted


# ── Request Dependency ────────────────────────────────────────────────────
def get_product_repository(
    database: DatabaseConnection = Depends(get_database),
) -> ProductRepository:
    return ProductRepository(database)
