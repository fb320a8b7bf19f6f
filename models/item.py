from enum import Enum

from sqlalchemy import (
    Column,
    String,
    Integer,
    Float,
    Date,
    JSON,
    ForeignKey,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.types import Enum as SAEnum

from models.base_model import BaseModel, Base


class ItemCategory(str, Enum):
    DAIRY = "Dairy"
    VEGETABLES = "Vegetables"
    FRUITS = "Fruits"
    MEAT = "Meat"
    GRAINS = "Grains"
    SNACKS = "Snacks"
    DRINKS = "Drinks"
    OTHER = "Other"


class Unit(str, Enum):
    PCS = "pcs"
    KG = "kg"
    G = "g"
    LITERS = "liters"
    ML = "ml"
    PACK = "pack"
    BOTTLE = "bottle"
    CAN = "can"
    BOX = "box"
    OTHER = "other"


class StorageLocation(str, Enum):
    FRIDGE = "Fridge"
    PANTRY = "Pantry"
    FREEZER = "Freezer"


def _values(enum_cls):
    return [m.value for m in enum_cls]


def constrained_enum(enum_cls, name: str) -> SAEnum:
    """Non-native enum stored by value, with a CHECK constraint on the column."""
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        values_callable=_values,
    )


class Item(BaseModel, Base):
    __tablename__ = "items"

    name = Column(String(255), nullable=False)
    category = Column(constrained_enum(ItemCategory, "item_category"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit = Column(constrained_enum(Unit, "item_unit"), nullable=False)
    storage_location = Column(constrained_enum(StorageLocation, "item_storage_location"), nullable=False)
    price = Column(Float, nullable=False)
    # [{"code": "...", "store_id": "..."}]; element shape is checked in-process
    barcodes = Column(JSON, nullable=False, default=list)
    expiry_date = Column(Date, nullable=True)
    date_purchased = Column(Date, nullable=True)

    # RESTRICT: a store cannot be removed while items still reference it
    store_id = Column(String(36), ForeignKey("stores.id", ondelete="RESTRICT"), nullable=False)
    store = relationship("Store", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_items_quantity_positive"),
        CheckConstraint("price >= 0", name="ck_items_price_nonnegative"),
        CheckConstraint("length(name) > 0", name="ck_items_name_nonempty"),
        Index("ix_items_name", "name"),
    )
