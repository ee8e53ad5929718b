from .auth_state import AuthState
from .cart_state import CartState

__all__ = ["AuthState", "CartState"]
