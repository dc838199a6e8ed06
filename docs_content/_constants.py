"""Common literal values used across docs_content.

These constants keep the virtual root, index file names, and ordering sentinel
centralized so the store, resolver, navigation builder, and tests cannot drift
apart. Intended for internal use within the docs_content package.

Examples
--------
>>> from docs_content import _constants
>>> _constants.DEFAULT_VIRTUAL_ROOT
'/content'
>>> "1.index.md".endswith(_constants.MARKDOWN_SUFFIX)
True
"""

DEFAULT_VIRTUAL_ROOT = "/content"
MARKDOWN_SUFFIX = ".md"
INDEX_STEM = "index"
NAVIGATION_CONFIG_NAME = ".navigation.yml"

# Unprefixed names sort after every explicitly ordered sibling.
UNORDERED = 999_999
