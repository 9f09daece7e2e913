"""Default values for the Arch Graph synchronization engine.

These constants are used as `Field(default=...)` values in the Pydantic
schemas. They live here (in the schemas layer) rather than in `core` so that
`schemas` does not depend on `core`.

All divider values are normalized ratios of the split container: 0.0 means the
primary (model) pane is collapsed, 1.0 means the secondary (graph) pane is.
"""

# =============================================================================
# PANE LAYOUT
# =============================================================================
DEFAULT_DIVIDER_POSITION = 0.6
DEFAULT_MIN_DIVIDER_RATIO = 0.2
DEFAULT_MAX_DIVIDER_RATIO = 0.8

# =============================================================================
# PERSISTENCE
# =============================================================================
# Key of the layout record inside the key-value storage backend.
DEFAULT_STORAGE_KEY = "arch-graph-layout-state"
# Directory used by the file-backed storage (relative to the working dir).
DEFAULT_STORAGE_DIR = ".arch_graph"

# =============================================================================
# SYNCHRONIZATION
# =============================================================================
DEFAULT_SYNC_ENABLED = True
DEFAULT_FOCUS_ANIMATE = True

# =============================================================================
# HIGHLIGHT PALETTE
# =============================================================================
# One hue family per category, one shade per intensity. "selected" is the
# strongest shade, "result" the mid shade, "preview" the lightest.
#
#   space   -> emerald
#   element -> blue
#   system  -> violet
#   pipe    -> amber
HIGHLIGHT_PALETTE: dict[str, dict[str, str]] = {
    "space": {"preview": "#6ee7b7", "result": "#10b981", "selected": "#047857"},
    "element": {"preview": "#93c5fd", "result": "#60a5fa", "selected": "#3b82f6"},
    "system": {"preview": "#c4b5fd", "result": "#8b5cf6", "selected": "#6d28d9"},
    "pipe": {"preview": "#fcd34d", "result": "#f59e0b", "selected": "#b45309"},
}
