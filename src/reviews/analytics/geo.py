"""Country lookup port.

Review submissions and widget views record a country derived from the
visitor's IP address. The default adapter is a static prefix table; a real
GeoIP service can be installed with ``set_country_lookup()``.
"""

from abc import ABC, abstractmethod

UNKNOWN_COUNTRY = "Unknown"


class CountryLookup(ABC):
    @abstractmethod
    def country_for(self, ip_address: str) -> str:
        """Return a country name for ``ip_address``."""
        ...


class PrefixCountryLookup(CountryLookup):
    """Matches IP address prefixes against a fixed table."""

    DEFAULT_PREFIXES = {
        "192.168.1.": "Ukraine",
        "10.0.0.": "Poland",
        "172.16.0.": "Spain",
    }

    def __init__(self, prefixes: dict[str, str] | None = None) -> None:
        self.prefixes = dict(self.DEFAULT_PREFIXES if prefixes is None else prefixes)

    def country_for(self, ip_address: str) -> str:
        for prefix, country in self.prefixes.items():
            if ip_address.startswith(prefix):
                return country
        return UNKNOWN_COUNTRY


_current_lookup: CountryLookup | None = None


def get_country_lookup() -> CountryLookup:
    """Return the active country lookup. Defaults to PrefixCountryLookup."""
    global _current_lookup
    if _current_lookup is None:
        _current_lookup = PrefixCountryLookup()
    return _current_lookup


def set_country_lookup(lookup: CountryLookup) -> None:
    """Override the active country lookup (useful for tests)."""
    global _current_lookup
    _current_lookup = lookup


def reset_country_lookup() -> None:
    """Reset to the default prefix table."""
    global _current_lookup
    _current_lookup = None
