"""Shared types for compose-check: TestVector, Sampling, Property, tallies and RunReport."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace

import numpy as np

BYTE_MAX = 255

# kernel(foreground, alpha, background) over broadcastable arrays
ArrayKernel = Callable[..., np.ndarray]


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= BYTE_MAX:
        raise ValueError(f'{name} must be in [0, {BYTE_MAX}], got {value}')


@dataclass(frozen=True)
class TestVector:
    """One curated (input, expected output) case for the kernel."""

    __test__ = False  # not a pytest class

    foreground: int
    alpha: int
    background: int
    expected: int
    description: str

    def __post_init__(self) -> None:
        for name in ('foreground', 'alpha', 'background', 'expected'):
            _check_byte(name, getattr(self, name))

    @property
    def sample(self) -> tuple[int, int, int]:
        return (self.foreground, self.alpha, self.background)


@dataclass(frozen=True)
class VectorResult:
    index: int  # 1-based position in the vector table
    vector: TestVector
    computed: int

    @property
    def passed(self) -> bool:
        return self.computed == self.vector.expected


@dataclass(frozen=True)
class FailureRecord:
    """A single property violation, kept only long enough to be printed."""

    index: int
    sample: tuple[int, int, int]  # (foreground, alpha, background)
    computed: int
    expected: str  # human-readable expectation, e.g. '== 73' or '<= 255'


@dataclass
class PropertyTally:
    """Counters for one property sweep."""

    name: str
    claim: str
    order: int
    checked: int = 0
    violations: int = 0
    failures: list[FailureRecord] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.violations == 0


@dataclass(frozen=True)
class Sampling:
    """Sampling policy for the property sweeps.

    A stride of 1 visits every byte on that axis. Larger strides only bound
    the run time; the properties are claimed for every input regardless.
    """

    identity_stride: int = 51  # foreground and background, alpha 0 / 255
    closure_bg_stride: int = 17  # background axis of range closure
    monotonic_fg_stride: int = 51
    monotonic_alpha_stride: int = 51
    max_reported: int = 10  # detail lines printed per failing property

    def __post_init__(self) -> None:
        for name in ('identity_stride', 'closure_bg_stride', 'monotonic_fg_stride', 'monotonic_alpha_stride'):
            value = getattr(self, name)
            if not 1 <= value <= BYTE_MAX:
                raise ValueError(f'{name} must be in [1, {BYTE_MAX}], got {value}')
        if self.max_reported < 0:
            raise ValueError(f'max_reported must not be negative, got {self.max_reported}')

    @classmethod
    def exhaustive(cls, max_reported: int = 10) -> Sampling:
        return cls(1, 1, 1, 1, max_reported)

    def with_overrides(self, **overrides: int | None) -> Sampling:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


class Property:
    """A self-registering universal property of the kernel.

    Usage in a property module:

        prop = Property(name='opacity', claim='alpha=255 => result = foreground', order=2)

        @prop.check
        def check(kernel, sampling, tally):
            ...
    """

    def __init__(self, name: str, claim: str, order: int, help: str = ''):
        self.name = name
        self.claim = claim
        self.order = order
        self.help = help
        self._check_fn: Callable | None = None

    def check(self, fn: Callable) -> Callable:
        """Decorator to register the sweep function."""
        self._check_fn = fn
        return fn

    def verify(self, kernel: ArrayKernel, sampling: Sampling) -> PropertyTally:
        """Run the sweep against kernel and return a fresh tally."""
        if self._check_fn is None:
            raise RuntimeError(f'Property {self.name} has no check function')
        tally = PropertyTally(name=self.name, claim=self.claim, order=self.order)
        self._check_fn(kernel, sampling, tally)
        return tally


@dataclass
class RunReport:
    """Accumulates vector results and property tallies for text/JSON output."""

    sampling: Sampling = field(default_factory=Sampling)
    vectors: list[VectorResult] = field(default_factory=list)
    properties: list[PropertyTally] = field(default_factory=list)

    @property
    def vector_failures(self) -> int:
        return sum(1 for r in self.vectors if not r.passed)

    @property
    def property_violations(self) -> int:
        return sum(t.violations for t in self.properties)

    @property
    def failure_count(self) -> int:
        """Aggregate failure counter: failed vectors plus every property violation."""
        return self.vector_failures + self.property_violations

    @property
    def failed_checks(self) -> int:
        """Distinct failing checks: each failed vector and each failed property counts once."""
        return self.vector_failures + sum(1 for t in self.properties if not t.passed)

    @property
    def passed(self) -> bool:
        return self.failure_count == 0
