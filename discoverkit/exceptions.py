"""
Exceptions raised by discoverkit.

Only setup defects surface as exceptions. Data-absence conditions
(unresolvable paths, missing types, corrupt cache files) are recovered
locally and show up as empty results instead.
"""


class DiscoveryError(Exception):
    """Base exception for discovery errors."""
    def __init__(self, message: str, strategy: str = ""):
        self.message = message
        self.strategy = strategy
        super().__init__(f"[{strategy}] {message}" if strategy else message)


class ConfigurationError(DiscoveryError):
    """Discovery was set up incorrectly."""
    pass


class IndexUnavailableError(ConfigurationError):
    """A strategy needs the attribute index but none was provided."""
    pass
