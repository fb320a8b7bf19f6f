from sqlalchemy import Column, String, CheckConstraint
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Store(BaseModel, Base):
    __tablename__ = "stores"

    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    contact_number = Column(String(64), nullable=True)
    website = Column(String(512), nullable=True)

    items = relationship("Item", back_populates="store", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("length(name) > 0", name="ck_stores_name_nonempty"),
        CheckConstraint("length(location) > 0", name="ck_stores_location_nonempty"),
    )
