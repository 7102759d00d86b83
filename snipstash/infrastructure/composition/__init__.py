from __future__ import annotations

# Public API of the composition root
from .container import (  # noqa: F401
    build_live_search,
    configure_logging,
    build_snippet_query_service,
    get_scheduler,
    make_debounced,
)
