"""
Central version constant for xelement.
"""

__version__ = "0.3.0"

# Version of the JSON shape emitted by `schema` dumps and the CLI.
SCHEMA_FORMAT_VERSION = "1"
