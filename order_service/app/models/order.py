from datetime import date, time

from sqlalchemy import TEXT, Boolean, Date, Integer, Time
from sqlalchemy.orm import Mapped, mapped_column

from .base import OrderServiceBase


class Order(OrderServiceBase):
    __tablename__ = "orders"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted last row
    __table_args__ = {"sqlite_autoincrement": True}

    order_id: Mapped[int] = mapped_column(
        "orderId", Integer, primary_key=True, autoincrement=True
    )
    items: Mapped[str | None] = mapped_column("items", TEXT, nullable=True)
    order_date: Mapped[date | None] = mapped_column("orderDate", Date, nullable=True)
    order_time: Mapped[time | None] = mapped_column("orderTime", Time, nullable=True)
    quantity: Mapped[int | None] = mapped_column("quantity", Integer, nullable=True)
    on_hand: Mapped[bool | None] = mapped_column("onHand", Boolean, nullable=True)

    def __repr__(self) -> str:
        return (
            f"Order(order_id={self.order_id!r}, items={self.items!r}, "
            f"order_date={self.order_date!r}, order_time={self.order_time!r}, "
            f"quantity={self.quantity!r}, on_hand={self.on_hand!r})"
        )
