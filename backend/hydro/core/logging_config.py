import logging
import sys

from hydro.config import settings
from hydro.core.tenant_context import get_current_corporation_id

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [corp=%(corporation_id)s] %(message)s"


class CorporationContextFilter(logging.Filter):
    """Stamps every record with the corporation of the current request"""

    def filter(self, record: logging.LogRecord) -> bool:
        corporation_id = get_current_corporation_id()
        record.corporation_id = corporation_id if corporation_id is not None else "-"
        return True


def configure_logging(level: str = None) -> None:
    """
    Configure the root logger once at startup

    Calling it again replaces the handler instead of stacking a new one.
    """
    root = logging.getLogger()
    root.setLevel(level or settings.LOG_LEVEL)

    for handler in list(root.handlers):
        if getattr(handler, "_hydro_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler._hydro_handler = True
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorporationContextFilter())
    root.addHandler(handler)

    # SQL echo is handled by SQL_ECHO, keep the engine logger quiet otherwise
    if not settings.SQL_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
