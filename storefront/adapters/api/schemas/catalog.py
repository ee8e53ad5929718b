"""Payload models for products, product customizations and categories."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .base import ApiModel


class ProductFilter(BaseModel):
    """Query options of ``GET /products``; unset options are not sent."""

    locale: str
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, ge=1)
    search: Optional[str] = None
    category_slug: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    is_customizable: Optional[bool] = None
    sort_by: Optional[str] = None
    sort_descending: Optional[bool] = None


class ProductListItem(ApiModel):
    id: str
    sku: str
    name: str
    slug: str
    short_description: Optional[str] = None
    base_price: float
    vat_rate: float
    image_url: Optional[str] = None
    is_active: bool
    is_customizable: bool


class ProductImage(ApiModel):
    id: str
    image_url: str
    alt_text: Optional[str] = None
    display_order: int


class ProductSpecification(ApiModel):
    spec_key: str
    spec_value: str
    display_order: int


class ProductDetail(ApiModel):
    id: str
    sku: str
    name: str
    slug: str
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    base_price: float
    vat_rate: float
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    model3d_url: Optional[str] = None
    model3d_size_kb: Optional[int] = None
    is_active: bool
    is_customizable: bool
    base_production_days: int
    weight_grams: Optional[int] = None
    created_at: datetime
    images: List[ProductImage] = Field(default_factory=list)
    specifications: List[ProductSpecification] = Field(default_factory=list)


class ComponentOptionDto(ApiModel):
    """One row of ``GET /components/product/{id}``."""

    component_id: str
    name: str
    description: Optional[str] = None
    option_group: str
    is_group_required: bool
    glb_object_name: Optional[str] = None
    thumbnail_url: Optional[str] = None
    price_modifier: float
    is_default: bool
    display_order: int
    in_stock: bool


class CustomizationOption(ApiModel):
    component_id: str
    name: str
    description: Optional[str] = None
    glb_object_name: Optional[str] = None
    thumbnail_url: Optional[str] = None
    price_modifier: float
    is_default: bool
    display_order: int
    in_stock: bool


class CustomizationGroup(ApiModel):
    # The option group name doubles as the selection key.
    name: str
    is_required: bool
    options: List[CustomizationOption] = Field(default_factory=list)


class CategoryFilter(BaseModel):
    locale: str
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, ge=1)
    is_active: Optional[bool] = None
    sort_by: Optional[str] = None
    sort_descending: Optional[bool] = None


class CategoryListItem(ApiModel):
    id: str
    name: str
    slug: str
    short_description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool


class CategoryImage(ApiModel):
    id: str
    image_url: str
    alt_text: Optional[str] = None


class CategoryDetail(ApiModel):
    id: str
    parent_category: Optional[str] = None
    name: str
    slug: str
    short_description: Optional[str] = None
    is_active: bool
    created_at: datetime
    image: Optional[CategoryImage] = None
