from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from neocoffee.shared.config.database import Base, new_id, utcnow


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("postazva IN (0, 1)", name="ck_orders_postazva"),
        # shipped date is present exactly when the order is shipped
        CheckConstraint(
            "(postazva = 1) = (postazva_datum IS NOT NULL)",
            name="ck_orders_postazva_datum",
        ),
    )

    id = Column(String(8), primary_key=True, default=new_id)
    vevo_nev = Column(String, nullable=False)
    telefon = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    iranyitoszam = Column(String, nullable=False)
    telepules = Column(String, nullable=False)
    utca_hazszam = Column(String, nullable=False)
    megrendelve = Column(DateTime, nullable=False, default=utcnow, index=True)
    postazva = Column(Integer, nullable=False, default=0)
    postazva_datum = Column(DateTime, nullable=True)

    items = relationship(
        "OrderItem",
        back_populates="order",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class OrderItem(Base):
    """One order line. Name and price are copied from the catalog at order time."""

    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("termek_ar > 0", name="ck_order_items_termek_ar_positive"),
        CheckConstraint("mennyiseg > 0", name="ck_order_items_mennyiseg_positive"),
    )

    id = Column(String(8), primary_key=True, default=new_id)
    rendeles_id = Column(
        String(8),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    termek_nev = Column(String, nullable=False)
    termek_ar = Column(Integer, nullable=False)
    mennyiseg = Column(Integer, nullable=False)
    tej = Column(String, nullable=False)
    cukor = Column(String, nullable=False)

    order = relationship("Order", back_populates="items")
