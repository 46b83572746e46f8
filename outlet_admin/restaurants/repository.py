import logging

from fastapi import Depends
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from outlet_admin.database import get_async_session
from outlet_admin.exceptions import (
    InvalidDiscountException,
    InvalidOrderTransitionException,
    MenuCategoryInUseException,
    MenuCategoryNotFoundException,
    MenuItemInUseException,
    MenuItemNotFoundException,
    OrderNotFoundException,
    SubCategoryNotFoundException,
)
from outlet_admin.outbox.publisher import record_event
from outlet_admin.restaurants.kitchen import (
    KITCHEN_STATUSES,
    TERMINAL_STATUSES,
    InvalidOrderTransition,
    format_order_number,
    group_for_kitchen,
    next_status,
)
from outlet_admin.restaurants.models import (
    MenuCategory,
    MenuItem,
    MenuItemVariant,
    Order,
    OrderCounter,
    OrderItem,
    SubCategory,
)
from outlet_admin.restaurants.schemas import (
    SMenuCategoryCreate,
    SMenuCategoryUpdate,
    SMenuItemCreate,
    SMenuItemUpdate,
    SOrderCreate,
    SOrderUpdate,
    SSubCategoryCreate,
    SSubCategoryUpdate,
)

logger = logging.getLogger(__name__)


class RestaurantRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Menu categories
    # ------------------------------------------------------------------

    async def list_categories(self, outlet_id: str):
        query = select(MenuCategory).where(MenuCategory.outlet_id == outlet_id).order_by(MenuCategory.name)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def get_category(self, outlet_id: str, category_id: str) -> MenuCategory:
        query = select(MenuCategory).where(MenuCategory.outlet_id == outlet_id, MenuCategory.id == category_id)
        category = (await self.db.execute(query)).scalar_one_or_none()
        if category is None:
            raise MenuCategoryNotFoundException()
        return category

    async def create_category(self, outlet_id: str, data: SMenuCategoryCreate) -> MenuCategory:
        category = MenuCategory(outlet_id=outlet_id, **data.model_dump())
        self.db.add(category)
        await self.db.commit()
        return category

    async def update_category(self, outlet_id: str, category_id: str, data: SMenuCategoryUpdate) -> MenuCategory:
        category = await self.get_category(outlet_id, category_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(category, key, value)
        await self.db.commit()
        return category

    async def delete_category(self, outlet_id: str, category_id: str) -> None:
        """Delete a category that has no sub-categories left and take it off every menu item."""
        category = await self.get_category(outlet_id, category_id)
        sub_categories = await self.db.scalar(
            select(func.count(SubCategory.id)).where(SubCategory.category_id == category.id)
        )
        if sub_categories:
            raise MenuCategoryInUseException()

        query = select(MenuItem).where(MenuItem.categories.any(MenuCategory.id == category.id))
        for item in (await self.db.execute(query)).scalars().all():
            item.categories.remove(category)
        await self.db.delete(category)
        await self.db.commit()

    async def _resolve_categories(self, outlet_id: str, category_ids):
        return [await self.get_category(outlet_id, category_id) for category_id in dict.fromkeys(category_ids)]

    # ------------------------------------------------------------------
    # Sub-categories
    # ------------------------------------------------------------------

    async def list_sub_categories(self, outlet_id: str, category_id: str = None):
        query = select(SubCategory).where(SubCategory.outlet_id == outlet_id)
        if category_id:
            query = query.where(SubCategory.category_id == category_id)
        result = await self.db.execute(query.order_by(SubCategory.name))
        return result.scalars().all()

    async def get_sub_category(self, outlet_id: str, sub_category_id: str) -> SubCategory:
        query = select(SubCategory).where(SubCategory.outlet_id == outlet_id, SubCategory.id == sub_category_id)
        sub_category = (await self.db.execute(query)).scalar_one_or_none()
        if sub_category is None:
            raise SubCategoryNotFoundException()
        return sub_category

    async def create_sub_category(self, outlet_id: str, data: SSubCategoryCreate) -> SubCategory:
        await self.get_category(outlet_id, data.category_id)
        sub_category = SubCategory(outlet_id=outlet_id, **data.model_dump())
        self.db.add(sub_category)
        await self.db.commit()
        return sub_category

    async def update_sub_category(self, outlet_id: str, sub_category_id: str,
                                  data: SSubCategoryUpdate) -> SubCategory:
        sub_category = await self.get_sub_category(outlet_id, sub_category_id)
        values = data.model_dump(exclude_unset=True)
        if values.get("category_id") is not None:
            await self.get_category(outlet_id, values["category_id"])
        for key, value in values.items():
            if value is not None:
                setattr(sub_category, key, value)
        await self.db.commit()
        return sub_category

    async def delete_sub_category(self, outlet_id: str, sub_category_id: str) -> None:
        sub_category = await self.get_sub_category(outlet_id, sub_category_id)
        await self.db.execute(
            update(MenuItem)
            .where(MenuItem.sub_category_id == sub_category.id)
            .values(sub_category_id=None)
        )
        await self.db.delete(sub_category)
        await self.db.commit()

    # ------------------------------------------------------------------
    # Menu items
    # ------------------------------------------------------------------

    async def list_menu_items(self, outlet_id: str, category_id: str = None):
        query = select(MenuItem).where(MenuItem.outlet_id == outlet_id)
        if category_id:
            query = query.where(MenuItem.categories.any(MenuCategory.id == category_id))
        result = await self.db.execute(query.order_by(MenuItem.name))
        return result.scalars().all()

    async def get_menu_item(self, outlet_id: str, item_id: str, populate_existing: bool = False) -> MenuItem:
        query = select(MenuItem).where(MenuItem.outlet_id == outlet_id, MenuItem.id == item_id)
        if populate_existing:
            query = query.execution_options(populate_existing=True)
        item = (await self.db.execute(query)).scalar_one_or_none()
        if item is None:
            raise MenuItemNotFoundException()
        return item

    async def create_menu_item(self, outlet_id: str, data: SMenuItemCreate) -> MenuItem:
        if data.sub_category_id is not None:
            await self.get_sub_category(outlet_id, data.sub_category_id)

        item = MenuItem(outlet_id=outlet_id, **data.model_dump(exclude={"category_ids", "variants"}))
        item.categories = await self._resolve_categories(outlet_id, data.category_ids)
        item.variants = [MenuItemVariant(**variant.model_dump()) for variant in data.variants]
        self.db.add(item)
        await self.db.commit()
        return await self.get_menu_item(outlet_id, item.id, populate_existing=True)

    async def update_menu_item(self, outlet_id: str, item_id: str, data: SMenuItemUpdate) -> MenuItem:
        item = await self.get_menu_item(outlet_id, item_id)
        values = data.model_dump(exclude_unset=True, exclude={"variants"})

        category_ids = values.pop("category_ids", None)
        if category_ids is not None:
            item.categories = await self._resolve_categories(outlet_id, category_ids)
        if values.get("sub_category_id") is not None:
            await self.get_sub_category(outlet_id, values["sub_category_id"])
        if data.variants is not None:
            item.variants = [MenuItemVariant(**variant.model_dump()) for variant in data.variants]

        for key, value in values.items():
            setattr(item, key, value)
        if item.discount_price is not None and item.discount_price > item.price:
            raise InvalidDiscountException()

        await self.db.commit()
        return await self.get_menu_item(outlet_id, item_id, populate_existing=True)

    async def delete_menu_item(self, outlet_id: str, item_id: str) -> None:
        item = await self.get_menu_item(outlet_id, item_id)
        referenced = await self.db.scalar(
            select(func.count(OrderItem.id)).where(OrderItem.menu_item_id == item.id)
        )
        if referenced:
            raise MenuItemInUseException()
        await self.db.delete(item)
        await self.db.commit()

    async def list_orders(self, outlet_id: str, status: str = None):
        query = select(Order).where(Order.outlet_id == outlet_id)
        if status:
            query = query.where(Order.status == status)
        result = await self.db.execute(query.order_by(Order.created_at, Order.order_number))
        return result.scalars().all()

    async def get_order(self, outlet_id: str, order_id: str, populate_existing: bool = False) -> Order:
        query = select(Order).where(Order.outlet_id == outlet_id, Order.id == order_id)
        if populate_existing:
            query = query.execution_options(populate_existing=True)
        order = (await self.db.execute(query)).scalar_one_or_none()
        if order is None:
            raise OrderNotFoundException()
        return order

    async def _next_order_number(self, outlet_id: str) -> str:
        query = select(OrderCounter).where(OrderCounter.outlet_id == outlet_id).with_for_update()
        counter = (await self.db.execute(query)).scalar_one_or_none()
        if counter is None:
            counter = OrderCounter(outlet_id=outlet_id, last_number=0)
            self.db.add(counter)
        counter.last_number += 1
        return format_order_number(counter.last_number)

    async def create_order(self, outlet_id: str, data: SOrderCreate) -> Order:
        lines = []
        total = 0.0
        for line in data.items:
            menu_item = await self.get_menu_item(outlet_id, line.menu_item_id)
            lines.append(OrderItem(menu_item_id=menu_item.id, quantity=line.quantity, unit_price=menu_item.price))
            total += menu_item.price * line.quantity

        order = Order(
            outlet_id=outlet_id,
            order_number=await self._next_order_number(outlet_id),
            customer_name=data.customer_name,
            status="pending",
            total_price=total,
            items=lines,
        )
        self.db.add(order)
        await self.db.commit()

        logger.info("Order %s created for %s", order.order_number, order.customer_name)
        return await self.get_order(outlet_id, order.id, populate_existing=True)

    async def update_order(self, outlet_id: str, order_id: str, data: SOrderUpdate) -> Order:
        """Generic edit. Any status may be set here as long as the order is still open."""
        order = await self.get_order(outlet_id, order_id)
        values = data.model_dump(exclude_unset=True)

        new_status = values.get("status")
        if new_status is not None and new_status != order.status and order.status in TERMINAL_STATUSES:
            raise InvalidOrderTransitionException(f"Order {order.order_number} is already {order.status}.")

        for key, value in values.items():
            setattr(order, key, value)
        if new_status is not None:
            record_event(self.db, "order_status_changed", {
                "order_id": order.id,
                "order_number": order.order_number,
                "status": order.status,
            })
        await self.db.commit()
        return await self.get_order(outlet_id, order_id, populate_existing=True)

    async def advance_order(self, outlet_id: str, order_id: str) -> Order:
        order = await self.get_order(outlet_id, order_id)
        try:
            order.status = next_status(order.status)
        except InvalidOrderTransition as e:
            raise InvalidOrderTransitionException(str(e))

        record_event(self.db, "order_status_changed", {
            "order_id": order.id,
            "order_number": order.order_number,
            "status": order.status,
        })
        await self.db.commit()

        logger.info("Order %s moved to %s", order.order_number, order.status)
        return await self.get_order(outlet_id, order_id, populate_existing=True)

    async def delete_order(self, outlet_id: str, order_id: str) -> None:
        order = await self.get_order(outlet_id, order_id)
        await self.db.delete(order)
        await self.db.commit()

    async def kitchen_board(self, outlet_id: str) -> dict:
        query = select(Order).where(
            Order.outlet_id == outlet_id,
            Order.status.in_(KITCHEN_STATUSES),
        ).order_by(Order.created_at, Order.order_number)
        result = await self.db.execute(query)
        return group_for_kitchen(result.scalars().all())


async def get_restaurant_repository(db: AsyncSession = Depends(get_async_session)):
    return RestaurantRepository(db)
