# app/routers/products.py
import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.exceptions import ProductNotFoundError, StoreError
from app.database import DataStore, get_store
from app.repositories.product_repo import ProductRepository
from app.schemas.product import CategoryRead, ProductRead
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])
categories_router = APIRouter(prefix="/categories", tags=["Products"])


def get_product_service(store: DataStore = Depends(get_store)) -> ProductService:
    return ProductService(ProductRepository(store))


@categories_router.get("", response_model=list[CategoryRead])
def list_categories(service: ProductService = Depends(get_product_service)):
    """
    Public: all product categories, by name.
    """
    return service.get_categories()


@router.get("", response_model=list[ProductRead])
def list_products(
    category_id: uuid.UUID | None = None,
    service: ProductService = Depends(get_product_service),
):
    """
    Public: list in-stock products, optionally filtered by category.
    """
    return service.list_products(category_id)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: uuid.UUID,
    service: ProductService = Depends(get_product_service),
):
    """
    Public: get a single product with farm and category names.
    """
    try:
        return service.get_product(product_id)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Product lookup failed",
        )
