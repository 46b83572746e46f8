from fastapi import APIRouter, Depends, Response

from outlet_admin.restaurants.repository import RestaurantRepository, get_restaurant_repository
from outlet_admin.restaurants.schemas import (
    OrderStatus,
    SKitchenBoard,
    SMenuCategory,
    SMenuCategoryCreate,
    SMenuCategoryUpdate,
    SMenuItem,
    SMenuItemCreate,
    SMenuItemUpdate,
    SOrder,
    SOrderCreate,
    SOrderUpdate,
    SSubCategory,
    SSubCategoryCreate,
    SSubCategoryUpdate,
)

router = APIRouter(prefix="/outlets/{outlet_id}")


# Menu categories

@router.get("/menu-categories")
async def list_menu_categories(outlet_id: str,
                               repo: RestaurantRepository = Depends(get_restaurant_repository)) -> list[SMenuCategory]:
    return await repo.list_categories(outlet_id)


@router.post("/menu-categories", status_code=201)
async def create_menu_category(outlet_id: str, data: SMenuCategoryCreate,
                               repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SMenuCategory:
    return await repo.create_category(outlet_id, data)


@router.get("/menu-categories/{category_id}")
async def get_menu_category(outlet_id: str, category_id: str,
                            repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SMenuCategory:
    return await repo.get_category(outlet_id, category_id)


@router.patch("/menu-categories/{category_id}")
async def update_menu_category(outlet_id: str, category_id: str, data: SMenuCategoryUpdate,
                               repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SMenuCategory:
    return await repo.update_category(outlet_id, category_id, data)


@router.delete("/menu-categories/{category_id}", status_code=204)
async def delete_menu_category(outlet_id: str, category_id: str,
                               repo: RestaurantRepository = Depends(get_restaurant_repository)):
    await repo.delete_category(outlet_id, category_id)
    return Response(status_code=204)


# Sub-categories

@router.get("/sub-categories")
async def list_sub_categories(
    outlet_id: str,
    category_id: str | None = None,
    repo: RestaurantRepository = Depends(get_restaurant_repository),
) -> list[SSubCategory]:
    return await repo.list_sub_categories(outlet_id, category_id)


@router.post("/sub-categories", status_code=201)
async def create_sub_category(outlet_id: str, data: SSubCategoryCreate,
                              repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SSubCategory:
    return await repo.create_sub_category(outlet_id, data)


@router.get("/sub-categories/{sub_category_id}")
async def get_sub_category(outlet_id: str, sub_category_id: str,
                           repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SSubCategory:
    return await repo.get_sub_category(outlet_id, sub_category_id)


@router.patch("/sub-categories/{sub_category_id}")
async def update_sub_category(outlet_id: str, sub_category_id: str, data: SSubCategoryUpdate,
                              repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SSubCategory:
    return await repo.update_sub_category(outlet_id, sub_category_id, data)


@router.delete("/sub-categories/{sub_category_id}", status_code=204)
async def delete_sub_category(outlet_id: str, sub_category_id: str,
                              repo: RestaurantRepository = Depends(get_restaurant_repository)):
    await repo.delete_sub_category(outlet_id, sub_category_id)
    return Response(status_code=204)


# Menu items

@router.get("/menu-items")
async def list_menu_items(
    outlet_id: str,
    category_id: str | None = None,
    repo: RestaurantRepository = Depends(get_restaurant_repository),
) -> list[SMenuItem]:
    return await repo.list_menu_items(outlet_id, category_id)


@router.post("/menu-items", status_code=201)
async def create_menu_item(outlet_id: str, data: SMenuItemCreate,
                           repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SMenuItem:
    return await repo.create_menu_item(outlet_id, data)


@router.get("/menu-items/{item_id}")
async def get_menu_item(outlet_id: str, item_id: str,
                        repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SMenuItem:
    return await repo.get_menu_item(outlet_id, item_id)


@router.patch("/menu-items/{item_id}")
async def update_menu_item(outlet_id: str, item_id: str, data: SMenuItemUpdate,
                           repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SMenuItem:
    return await repo.update_menu_item(outlet_id, item_id, data)


@router.delete("/menu-items/{item_id}", status_code=204)
async def delete_menu_item(outlet_id: str, item_id: str,
                           repo: RestaurantRepository = Depends(get_restaurant_repository)):
    await repo.delete_menu_item(outlet_id, item_id)
    return Response(status_code=204)


# Orders

@router.get("/orders")
async def list_orders(
    outlet_id: str,
    status: OrderStatus | None = None,
    repo: RestaurantRepository = Depends(get_restaurant_repository),
) -> list[SOrder]:
    return await repo.list_orders(outlet_id, status)


@router.post("/orders", status_code=201)
async def create_order(outlet_id: str, data: SOrderCreate,
                       repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SOrder:
    return await repo.create_order(outlet_id, data)


@router.get("/orders/{order_id}")
async def get_order(outlet_id: str, order_id: str,
                    repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SOrder:
    return await repo.get_order(outlet_id, order_id)


@router.patch("/orders/{order_id}")
async def update_order(outlet_id: str, order_id: str, data: SOrderUpdate,
                       repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SOrder:
    return await repo.update_order(outlet_id, order_id, data)


@router.post("/orders/{order_id}/advance")
async def advance_order(outlet_id: str, order_id: str,
                        repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SOrder:
    """Move the order one step along pending -> preparing -> ready -> delivered."""
    return await repo.advance_order(outlet_id, order_id)


@router.delete("/orders/{order_id}", status_code=204)
async def delete_order(outlet_id: str, order_id: str,
                       repo: RestaurantRepository = Depends(get_restaurant_repository)):
    await repo.delete_order(outlet_id, order_id)
    return Response(status_code=204)


@router.get("/kot")
async def kitchen_board(outlet_id: str,
                        repo: RestaurantRepository = Depends(get_restaurant_repository)) -> SKitchenBoard:
    return await repo.kitchen_board(outlet_id)
