from contextvars import ContextVar
from typing import Optional

# Corporation of the request being served, readable anywhere without passing it around
_corporation_id_ctx_var: ContextVar[Optional[int]] = ContextVar('corporation_id', default=None)


def get_current_corporation_id() -> Optional[int]:
    """
    Corporation id of the current request context
    """
    return _corporation_id_ctx_var.get()


def set_current_corporation_id(corporation_id: int) -> None:
    _corporation_id_ctx_var.set(corporation_id)


def clear_current_corporation_id() -> None:
    _corporation_id_ctx_var.set(None)
