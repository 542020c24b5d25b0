from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.sql import func

from app.database.connection import Base


class BlacklistedToken(Base):
    __tablename__ = "tb_blacklisted_token"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(Text, nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    expires_at = Column(DateTime, nullable=False)


Index("ix_tb_blacklisted_token_expires_at", BlacklistedToken.expires_at)
