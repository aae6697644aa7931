"""
Yolomy Products Backend — Product Document Model
=================================================

What:  mongoengine documents describing a product as stored in the
       `products` collection.
Who:   Used by ProductRepository for every database operation.

Document Design:
    - `_id`: ObjectId assigned by the database on insert; immutable.
    - No field is required at the document level. Input validation lives in
      the Pydantic `ProductCreate` schema; the document only describes shape.
    - The uploaded image is embedded (bytes + metadata) rather than written
      to disk or GridFS, so a product is one self-contained document and
      delete removes everything in one operation.
"""

from mongoengine import (
    BinaryField,
    Document,
    EmbeddedDocument,
    EmbeddedDocumentField,
    FloatField,
    IntField,
    StringField,
)


class ProductImage(EmbeddedDocument):
    """Uploaded image bytes plus the metadata needed to serve them back."""

    filename = StringField()
    content_type = StringField()
    size = IntField()
    data = BinaryField()

    def to_dict(self) -> dict:
        # Raw bytes are intentionally left out; they are served by the
        # image route instead of being inlined into JSON.
        return {
            "filename": self.filename,
            "content_type": self.content_type,
            "size": self.size,
        }


class Product(Document):
    name = StringField()
    description = StringField()
    category = StringField()
    quantity = IntField()
    price = FloatField()
    image = EmbeddedDocumentField(ProductImage)

    meta = {"collection": "products"}

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "quantity": self.quantity,
            "price": self.price,
            "image": self.image.to_dict() if self.image else None,
        }

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}')>"
