# API Utilities - shared route helpers
from hydro.api.utils.db_helpers import get_by_id, validate_fk, validate_unique, ensure_not_referenced
from hydro.api.utils.pagination import paginate_query, apply_search_filter
from hydro.api.utils.sequencers import next_number, format_reference, Prefixes
from hydro.api.utils.updates import update_entity

__all__ = [
    # db_helpers
    "get_by_id",
    "validate_fk",
    "validate_unique",
    "ensure_not_referenced",
    # pagination
    "paginate_query",
    "apply_search_filter",
    # sequencers
    "next_number",
    "format_reference",
    "Prefixes",
    # updates
    "update_entity",
]
