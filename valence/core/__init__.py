# Core module exports
from valence.core.config import Settings, get_settings
from valence.core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    unbind_context,
    engine_logger,
    reporting_logger,
    locale_logger,
)
