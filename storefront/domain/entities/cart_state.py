"""Client-side cart state.

Holds the last known cart snapshot together with the loading flag, the last
error message and the name of the most recently added item. `CartApi` keeps
it current; quantity changes and removals are applied to the snapshot before
the server confirms them and rolled back when the server call fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from storefront.adapters.api.schemas.cart import CartDto


@dataclass
class CartState:
    """Snapshot of the shopping cart as last seen by the client.

    Attributes:
        cart: Last cart returned by the server or computed optimistically.
        is_loading: Whether a fetch or add is running.
        error: Message of the last failed cart operation.
        last_added_item: Name of the item added last, until acknowledged.
    """

    cart: Optional["CartDto"] = None
    is_loading: bool = False
    error: Optional[str] = None
    last_added_item: Optional[str] = None

    @property
    def item_count(self) -> int:
        return self.cart.total_items if self.cart else 0

    def start_loading(self) -> None:
        self.is_loading = True
        self.error = None

    def set_cart(self, cart: "CartDto") -> None:
        self.cart = cart
        self.is_loading = False

    def fail(self, message: str, previous: Optional["CartDto"] = None, rollback: bool = False) -> None:
        """Record a failed operation, restoring ``previous`` when ``rollback`` is set."""
        if rollback:
            self.cart = previous
        self.is_loading = False
        self.error = message

    def clear_notification(self) -> None:
        self.last_added_item = None

    def reset(self) -> None:
        self.cart = None
        self.is_loading = False
        self.error = None
        self.last_added_item = None
