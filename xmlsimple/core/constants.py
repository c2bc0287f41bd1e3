"""
Core constants used throughout the xmlsimple package.
"""

# File system paths
CONFIG_DEFAULTS_DIR = "config/defaults"

# Path expressions
PATH_SEPARATOR = "."
ARROW_SEPARATOR = "->"
NAMESPACE_SEPARATOR = ":"

# Value coercion
DEFAULT_DECIMAL_SEPARATOR = "."
TRUE_VALUES = ("true", "1")

# Environment variables prefixed with this are read into the settings
ENV_PREFIX = "XMLSIMPLE_"
