"""addon-creator - scaffold new add-ons for the Local desktop application.

By default, internal logging is disabled when used as a library.
Library users can enable logging by calling addon_creator.enable_logging().
"""

from addon_creator.common import disable_library_logging, enable_library_logging

disable_library_logging()

enable_logging = enable_library_logging

__all__ = [
    "enable_logging",
]
