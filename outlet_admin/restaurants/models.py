from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from outlet_admin.database import Base
from outlet_admin.hotels.models import new_id, utcnow
from outlet_admin.restaurants.kitchen import action_label


menu_item_categories = Table(
    "menu_item_categories",
    Base.metadata,
    Column("menu_item_id", ForeignKey("menu_items.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", ForeignKey("menu_categories.id", ondelete="CASCADE"), primary_key=True),
)


class MenuCategory(Base):
    __tablename__ = "menu_categories"

    id = Column(String, primary_key=True, default=new_id)
    outlet_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, default="", nullable=False)


class SubCategory(Base):
    __tablename__ = "menu_sub_categories"

    id = Column(String, primary_key=True, default=new_id)
    outlet_id = Column(String, nullable=False, index=True)
    category_id = Column(ForeignKey("menu_categories.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, default="", nullable=False)


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String, primary_key=True, default=new_id)
    outlet_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    sku = Column(String, default="", nullable=False)
    description = Column(Text, default="", nullable=False)
    price = Column(Float, nullable=False)
    discount_price = Column(Float, nullable=True)
    # VEG, NON_VEG, VEGAN
    dietary_type = Column(String, default="VEG", nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    sub_category_id = Column(ForeignKey("menu_sub_categories.id", ondelete="SET NULL"), nullable=True)

    categories = relationship(MenuCategory, secondary=menu_item_categories, lazy="selectin")
    variants = relationship("MenuItemVariant", lazy="selectin", cascade="all, delete-orphan",
                            order_by="MenuItemVariant.id")

    @property
    def category_ids(self):
        return [category.id for category in self.categories]

    @property
    def has_variants(self):
        return bool(self.variants)


class MenuItemVariant(Base):
    __tablename__ = "menu_item_variants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    menu_item_id = Column(ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    stock_count = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=new_id)
    outlet_id = Column(String, nullable=False, index=True)
    order_number = Column(String, nullable=False)
    customer_name = Column(String, nullable=False)

    # pending, preparing, ready, delivered, cancelled
    status = Column(String, default="pending", nullable=False, index=True)
    total_price = Column(Float, default=0, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    items = relationship("OrderItem", lazy="selectin", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("outlet_id", "order_number", name="uq_order_number_per_outlet"),
    )

    @property
    def next_action(self):
        return action_label(self.status)


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_item_id = Column(ForeignKey("menu_items.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    # price at the time the order was taken
    unit_price = Column(Float, nullable=False)


class OrderCounter(Base):
    """Last order number handed out per outlet; numbers are never reused."""

    __tablename__ = "order_counters"

    outlet_id = Column(String, primary_key=True)
    last_number = Column(Integer, default=0, nullable=False)
