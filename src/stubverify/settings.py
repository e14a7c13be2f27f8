"""
StubVerify Global Settings

Server-wide response delay settings and the client-side cache holding the
last snapshot successfully applied to the server.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UniformDistribution:
    """Random delay drawn uniformly from [lower, upper] milliseconds."""

    lower: int
    upper: int

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'uniform', 'lower': self.lower, 'upper': self.upper}


@dataclass(frozen=True)
class LogNormalDistribution:
    """Random delay with a log-normal shape around median milliseconds."""

    median: float
    sigma: float

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'lognormal', 'median': self.median, 'sigma': self.sigma}


def delay_distribution_from_dict(data: Optional[Dict[str, Any]]):
    """Parse a delay distribution from the admin JSON format (None passes through)."""
    if not data:
        return None
    kind = data.get('type')
    if kind == 'uniform':
        return UniformDistribution(lower=int(data['lower']), upper=int(data['upper']))
    if kind == 'lognormal':
        return LogNormalDistribution(median=float(data['median']), sigma=float(data['sigma']))
    raise ValueError(f"Unknown delay distribution type: {kind}")


@dataclass(frozen=True)
class GlobalSettings:
    """Immutable snapshot of server-wide settings."""

    fixed_delay_ms: Optional[int] = None
    delay_distribution: Any = None

    def copy(self, **changes) -> 'GlobalSettings':
        """Return a new snapshot with the given fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.fixed_delay_ms is not None:
            data['fixedDelay'] = self.fixed_delay_ms
        if self.delay_distribution is not None:
            data['delayDistribution'] = self.delay_distribution.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GlobalSettings':
        return cls(
            fixed_delay_ms=data.get('fixedDelay'),
            delay_distribution=delay_distribution_from_dict(data.get('delayDistribution'))
        )


class GlobalSettingsHolder:
    """
    Holds the current GlobalSettings snapshot.

    The held object is never mutated; updates swap the reference, so a reader
    always sees a complete snapshot. There is no compare-and-swap, concurrent
    writers can lose updates.
    """

    def __init__(self, settings: Optional[GlobalSettings] = None):
        self._settings = settings or GlobalSettings()

    def get(self) -> GlobalSettings:
        return self._settings

    def replace_with(self, settings: GlobalSettings):
        self._settings = settings
