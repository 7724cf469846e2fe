"""
Default exclusion constants for workspace discovery.
"""

# Names starting with this marker (".git", ".vscode", ".env", ...) are never indexed
HIDDEN_PREFIX = "."

# Build output and dependency caches, pruned without descending
DEFAULT_EXCLUDED_DIRECTORIES: tuple[str, ...] = (
    "node_modules",
    "out",
)
