"""
Yolomy Products Backend — Pydantic Request/Response Schemas
============================================================

What:  Pydantic models defining the API contract for the products resource.
How:   `ProductCreate` validates the create payload whether it arrived as
       JSON or as form fields; the response models serialize documents
       returned by the repository.

Field Policy (create):
    required: name (non-empty), quantity (integer), price (finite number)
    optional: description, category, image (uploaded file)
    quantity is only bounded by what a BSON int64 can hold; price has no
    range constraint but NaN and infinities are rejected.
"""

from typing import Optional

from pydantic import BaseModel, Field

BSON_INT64_MIN = -(2**63)
BSON_INT64_MAX = 2**63 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ImageUpload(BaseModel):
    """An uploaded image file read into memory, ready to embed in a document."""

    filename: str = Field(description="Original filename from the upload")
    content_type: str = Field(description="MIME type reported by the client")
    data: bytes = Field(description="Raw file content")

    @property
    def size(self) -> int:
        return len(self.data)


class ProductCreate(BaseModel):
    """
    What:  Validated input for POST /api/products.
    Who:   Built by the products route from a JSON body or form fields;
           consumed by ProductRepository.create().
    """

    name: str = Field(min_length=1, description="Product name")
    description: Optional[str] = Field(default=None, description="Free-text description")
    category: Optional[str] = Field(default=None, description="Category label")
    # BSON integers are signed 64-bit
    quantity: int = Field(ge=BSON_INT64_MIN, le=BSON_INT64_MAX, description="Units in stock")
    price: float = Field(allow_inf_nan=False, description="Unit price")
    image: Optional[ImageUpload] = Field(default=None, description="Uploaded image file")

    model_config = {"str_strip_whitespace": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductImageResponse(BaseModel):
    """Image metadata; the bytes themselves are served from `url`."""

    filename: Optional[str] = None
    content_type: Optional[str] = None
    size: Optional[int] = None
    url: str = Field(description="Path of the image download route")


class ProductResponse(BaseModel):
    """
    What:  A stored product as returned by list and create.
    Why:   `id` is the database-assigned ObjectId rendered as a hex string.
    """

    id: str = Field(description="Database-assigned product identifier")
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[float] = None
    image: Optional[ProductImageResponse] = None

    @classmethod
    def from_document(cls, document) -> "ProductResponse":
        data = document.to_dict()
        if data["image"] is not None:
            data["image"]["url"] = f"/api/products/{data['id']}/image"
        return cls(**data)


class DeleteResponse(BaseModel):
    success: bool = True
    message: str = "Product deleted"


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body returned by every failing endpoint.

    Example:
        {"error": "Product not found"}
    """

    error: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Validation details (400 only)")


class FieldError(BaseModel):
    field: str
    message: str


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
