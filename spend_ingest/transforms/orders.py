"""Order export transformation."""

from typing import Dict, List, Union

from ..config import ORDERS_FIELDS
from ..models import OrderRecord, Skip
from .base import BaseTransform
from .utils import RawRow, to_date, to_number, to_text


class OrdersTransform(BaseTransform):
    """Transform order export rows to canonical order records.

    Rows without an id or a parseable creation date are dropped. Missing
    paid/due amounts default to 0 since unpaid orders are legitimate;
    negative amounts are floored at 0.
    """

    @property
    def fields(self) -> Dict[str, List[str]]:
        return ORDERS_FIELDS

    def normalize_row(self, row: RawRow) -> Union[OrderRecord, Skip]:
        order_id = to_text(self.resolve(row, "order_id"))
        if not order_id:
            return Skip("missing_order_id")

        order_date = to_date(self.resolve(row, "order_date"))
        if order_date is None:
            return Skip("bad_date")

        # Refund lines are kept; a negative amount is floored at 0.
        paid = max(to_number(self.resolve(row, "paid_amount")) or 0.0, 0.0)
        due = max(to_number(self.resolve(row, "due_amount")) or 0.0, 0.0)

        return OrderRecord(
            order_id=order_id,
            order_date=order_date,
            order_status=to_text(self.resolve(row, "order_status")) or "",
            paid_amount_bdt=paid,
            due_amount_bdt=due,
            conversation_id=to_text(self.resolve(row, "conversation_id")),
        )


def create_orders_transform() -> OrdersTransform:
    """Factory function to create the orders transformer."""
    return OrdersTransform()
