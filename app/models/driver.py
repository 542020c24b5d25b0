from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from app.database.connection import Base


class Driver(Base):
    __tablename__ = "tb_driver"
    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive')", name="ck_tb_driver_status"),
        CheckConstraint("vehicle_capacity >= 1", name="ck_tb_driver_capacity"),
        CheckConstraint(
            "vehicle_type IN ('car', 'motorcycle', 'auto')", name="ck_tb_driver_vehicle_type"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    firstname = Column(String(100), nullable=False)
    lastname = Column(String(100), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    socket_id = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, server_default="inactive")

    vehicle_color = Column(String(50), nullable=False)
    vehicle_plate = Column(String(20), nullable=False)
    vehicle_capacity = Column(Integer, nullable=False)
    vehicle_type = Column(String(20), nullable=False)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
