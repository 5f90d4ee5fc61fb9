from sqlalchemy import CheckConstraint, Column, Integer, String

from neocoffee.shared.config.database import Base, new_id


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("ar > 0", name="ck_products_ar_positive"),)

    id = Column(String(8), primary_key=True, default=new_id)
    nev = Column(String, nullable=False)
    ar = Column(Integer, nullable=False)  # minor currency unit (Ft)
    kep_url = Column(String, nullable=True)
