from sqlalchemy import Column, Integer, String, Text, DateTime
from smart_campus.db import Base


class StoredCollection(Base):
    __tablename__ = "collections"

    name = Column(String, primary_key=True, index=True)
    version = Column(Integer, nullable=False)
    payload = Column(Text, nullable=False)
    saved_at = Column(DateTime, nullable=False)
