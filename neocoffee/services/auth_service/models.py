from sqlalchemy import Column, DateTime, String

from neocoffee.shared.config.database import Base, new_id, utcnow


class Admin(Base):
    __tablename__ = "admins"

    id = Column(String(8), primary_key=True, default=new_id)
    felhasznalonev = Column(String(255), unique=True, nullable=False, index=True)
    jelszo_hash = Column(String(255), nullable=False)
    letrehozva = Column(DateTime, nullable=False, default=utcnow)
