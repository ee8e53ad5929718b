"""Product and category catalog clients."""

from typing import Dict, List, Union

from storefront.infrastructure.http.client import ApiClient

from .schemas.base import PaginatedResult
from .schemas.catalog import (
    CategoryDetail,
    CategoryFilter,
    CategoryListItem,
    ComponentOptionDto,
    CustomizationGroup,
    CustomizationOption,
    ProductDetail,
    ProductFilter,
    ProductListItem,
)

QueryValue = Union[str, int, float, bool]


def _product_params(filters: ProductFilter) -> Dict[str, QueryValue]:
    params: Dict[str, QueryValue] = {
        "Page": filters.page,
        "PageSize": filters.page_size,
        "Locale": filters.locale,
    }
    if filters.search:
        params["Search"] = filters.search
    if filters.category_slug:
        params["CategorySlug"] = filters.category_slug
    if filters.min_price is not None:
        params["MinPrice"] = filters.min_price
    if filters.max_price is not None:
        params["MaxPrice"] = filters.max_price
    if filters.is_customizable is not None:
        params["IsCustomizable"] = _flag(filters.is_customizable)
    if filters.sort_by:
        params["SortBy"] = filters.sort_by
    if filters.sort_descending is not None:
        params["SortDescending"] = _flag(filters.sort_descending)
    return params


def _category_params(filters: CategoryFilter) -> Dict[str, QueryValue]:
    params: Dict[str, QueryValue] = {
        "Page": filters.page,
        "PageSize": filters.page_size,
        "Locale": filters.locale,
    }
    if filters.is_active is not None:
        params["IsActive"] = _flag(filters.is_active)
    if filters.sort_by:
        params["SortBy"] = filters.sort_by
    if filters.sort_descending is not None:
        params["SortDescending"] = _flag(filters.sort_descending)
    return params


def _flag(value: bool) -> str:
    # httpx would send Python's "True"/"False".
    return "true" if value else "false"


def group_customizations(options: List[ComponentOptionDto]) -> List[CustomizationGroup]:
    """Group a flat component list by option group.

    Groups keep the order in which they first appear; options inside a group
    are sorted by ``display_order``.
    """
    groups: Dict[str, CustomizationGroup] = {}
    for raw in options:
        group = groups.get(raw.option_group)
        if group is None:
            group = CustomizationGroup(name=raw.option_group, is_required=raw.is_group_required)
            groups[raw.option_group] = group
        group.options.append(
            CustomizationOption(
                component_id=raw.component_id,
                name=raw.name,
                description=raw.description,
                glb_object_name=raw.glb_object_name,
                thumbnail_url=raw.thumbnail_url,
                price_modifier=raw.price_modifier,
                is_default=raw.is_default,
                display_order=raw.display_order,
                in_stock=raw.in_stock,
            )
        )
    for group in groups.values():
        group.options.sort(key=lambda option: option.display_order)
    return list(groups.values())


class ProductsApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def get_products(self, filters: ProductFilter) -> PaginatedResult[ProductListItem]:
        response = await self._client.get("/products", params=_product_params(filters))
        return PaginatedResult[ProductListItem].model_validate(response.json())

    async def get_product_by_slug(self, slug: str, locale: str) -> ProductDetail:
        response = await self._client.get(f"/products/slug/{slug}", params={"Locale": locale})
        return ProductDetail.model_validate(response.json())

    async def get_product_customizations(self, product_id: str, locale: str) -> List[CustomizationGroup]:
        response = await self._client.get(f"/components/product/{product_id}", params={"locale": locale})
        options = [ComponentOptionDto.model_validate(item) for item in response.json()]
        return group_customizations(options)


class CategoriesApi:
    def __init__(self, client: ApiClient):
        self._client = client

    async def get_categories(self, filters: CategoryFilter) -> PaginatedResult[CategoryListItem]:
        response = await self._client.get("/categories", params=_category_params(filters))
        return PaginatedResult[CategoryListItem].model_validate(response.json())

    async def get_category_by_id(self, category_id: str, locale: str) -> CategoryDetail:
        response = await self._client.get(f"/categories/{category_id}", params={"Locale": locale})
        return CategoryDetail.model_validate(response.json())
