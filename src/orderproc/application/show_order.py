"""Application service: order queries."""

from __future__ import annotations

from orderproc.application.dto import OrderDTO, order_to_dto
from orderproc.domain.exceptions import OrderNotFoundError
from orderproc.domain.repository.order_repository import OrderRepository
from orderproc.logging_config import observed

DEFAULT_PAGE_SIZE = 10


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    @observed("show_order")
    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(
        self, order_repo: OrderRepository, default_page_size: int = DEFAULT_PAGE_SIZE
    ) -> None:
        self._order_repo = order_repo
        self._default_page_size = default_page_size

    @observed("list_orders")
    def handle(self, page: int = 1, page_size: int | None = None) -> list[OrderDTO]:
        """Return one page of orders, newest created first.

        Non-positive values fall back to page 1 and the default page size.
        """
        if page <= 0:
            page = 1
        if page_size is None or page_size <= 0:
            page_size = self._default_page_size

        orders = self._order_repo.list_page((page - 1) * page_size, page_size)
        return [order_to_dto(o) for o in orders]
