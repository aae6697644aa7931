"""
Yolomy Products Backend — Product Route Handlers
=================================================

What:  GET /api/products (list), POST /api/products (create),
       DELETE /api/products/{id} (delete), GET /api/products/{id}/image.
How:   Each handler extracts its input, issues one repository call, and maps
       the outcome to a response. Failures propagate as application
       exceptions; the global handlers in main.py turn them into
       `{"error": ...}` bodies.
Who:   Called by the storefront frontend.

Create accepts either a JSON object or form fields (multipart or
urlencoded). The uploaded file is read from the `image` form field.
"""

import json
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError as PydanticValidationError

from yolomy.exceptions import NotFoundError, ValidationError
from yolomy.schemas.product import (
    DeleteResponse,
    ErrorResponse,
    FieldError,
    ProductCreate,
    ProductResponse,
)
from yolomy.services.image_service import ImageService, get_image_service
from yolomy.services.product_repository import ProductRepository, get_product_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])

PRODUCT_FIELDS = ("name", "description", "category", "quantity", "price")
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


# ══════════════════════════════════════════════════════════════════════════
# Request Parsing
# ══════════════════════════════════════════════════════════════════════════


async def _read_json_fields(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError(message="Request body is not valid JSON")
    if not isinstance(body, dict):
        raise ValidationError(message="Request body must be a JSON object")
    fields = {key: body[key] for key in PRODUCT_FIELDS if key in body}
    if body.get("image") is not None:
        raise ValidationError(
            message="Field 'image' must be sent as a multipart file upload",
            field="image",
        )
    return fields


async def _read_form_fields(request: Request, images: ImageService) -> Dict[str, Any]:
    form = await request.form()
    fields: Dict[str, Any] = {}
    for key in PRODUCT_FIELDS:
        value = form.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ValidationError(message=f"Field '{key}' must be a text value", field=key)
        # Empty optional inputs arrive as "" from HTML forms
        if value == "" and key in ("description", "category"):
            continue
        fields[key] = value
    fields["image"] = await images.read_upload(form.get("image"))
    return fields


async def parse_product_create(request: Request, images: ImageService) -> ProductCreate:
    """
    Build a validated ProductCreate from a JSON or form request.

    Raises:
        ValidationError: unreadable body or fields failing the schema.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        fields = await _read_form_fields(request, images)
    else:
        fields = await _read_json_fields(request)

    try:
        return ProductCreate.model_validate(fields)
    except PydanticValidationError as e:
        errors = [
            FieldError(
                field=".".join(str(part) for part in err["loc"]) or "body",
                message=err["msg"],
            ).model_dump()
            for err in e.errors()
        ]
        raise ValidationError(
            message="Invalid product data",
            context={"errors": errors},
        )


# ══════════════════════════════════════════════════════════════════════════
# Routes
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "",
    response_model=List[ProductResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List all products",
)
async def list_products(
    repository: ProductRepository = Depends(get_product_repository),
) -> List[ProductResponse]:
    products = await repository.list_all()
    return [ProductResponse.from_document(product) for product in products]


@router.post(
    "",
    response_model=ProductResponse,
    responses={
        400: {"description": "Invalid product data", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Add a product",
    description=(
        "Create a product from a JSON object or from form fields. "
        "An image may be attached as the multipart file field `image`."
    ),
)
async def create_product(
    request: Request,
    repository: ProductRepository = Depends(get_product_repository),
    images: ImageService = Depends(get_image_service),
) -> ProductResponse:
    """
    Create a product.

    Fields: name (required), quantity (required), price (required),
    description, category, image (file).
    """
    fields = await parse_product_create(request, images)

    logger.info(
        "Received create request: name=%s, image=%s",
        fields.name,
        f"{fields.image.size} bytes" if fields.image else "none",
    )

    product = await repository.create(fields)
    return ProductResponse.from_document(product)


@router.delete(
    "/{product_id}",
    response_model=DeleteResponse,
    responses={
        400: {"description": "Malformed product id", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository),
) -> DeleteResponse:
    deleted = await repository.delete_by_id(product_id)
    if deleted is None:
        raise NotFoundError(resource="product", resource_id=product_id)
    return DeleteResponse()


@router.get(
    "/{product_id}/image",
    responses={
        200: {"description": "Stored image bytes"},
        400: {"description": "Malformed product id", "model": ErrorResponse},
        404: {"description": "Product or image not found", "model": ErrorResponse},
    },
    summary="Download a product's image",
)
async def get_product_image(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository),
) -> Response:
    product = await repository.get_by_id(product_id)
    if product is None:
        raise NotFoundError(resource="product", resource_id=product_id)

    image = product.image
    if image is None or image.data is None:
        raise NotFoundError(resource="image", resource_id=product_id)

    return Response(
        content=bytes(image.data),
        media_type=image.content_type or "application/octet-stream",
        headers={"Cache-Control": "private, max-age=3600"},
    )
