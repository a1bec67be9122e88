"""Storage module for mass combat persistence.

Provides JSON-file storage for:
- Monster templates (one document per template)
- The single saved encounter (load-once session file)
"""

from mass_combat.storage.session_store import SessionStore
from mass_combat.storage.template_store import (
    TemplateSource,
    TemplateStore,
    selections_from_counts,
)

__all__ = [
    "SessionStore",
    "TemplateSource",
    "TemplateStore",
    "selections_from_counts",
]
