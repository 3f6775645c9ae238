from sqlalchemy import Column, JSON, String

from babybook.db.session import Base


class SiteSetting(Base):
    __tablename__ = "site_settings"

    key = Column(String, primary_key=True)
    value = Column(JSON)
