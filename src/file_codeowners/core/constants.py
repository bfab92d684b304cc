"""
Application-wide constants.
"""

# Marker that starts the non-standard section listing known-unowned paths
UNOWNED_MARKER = "### UNOWNED (File::Codeowners)"

# Rule lines separate the pattern from its owners with two spaces on output
OWNER_SEPARATOR = "  "
