# noqa: D104 - package initialization
from .logging import JsonFormatter, RequestContextFilter, configure_structured_logging  # noqa: F401
from .metrics import (  # noqa: F401
    metrics_blueprint,
    record_playlist_created,
    record_prompt_parse_failure,
    record_search,
    record_upstream_failure,
)
