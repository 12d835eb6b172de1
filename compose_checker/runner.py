"""Run the vector suite then every registered property, and turn the result into an exit status."""

from collections.abc import Callable

from compose_checker import registry
from compose_checker.core import kernel
from compose_checker.core.types import ArrayKernel, RunReport, Sampling
from compose_checker.core.vectors import run_vectors

# Largest value a process exit status can carry without wrapping to 0
MAX_EXIT_STATUS = 255


def run_suite(
    sampling: Sampling | None = None,
    vector_kernel: Callable[[int, int, int], int] | None = None,
    property_kernel: ArrayKernel | None = None,
) -> RunReport:
    """Check every vector and every property. Nothing here stops early on a failure.

    By default both halves run kernel.compose: the vectors call it directly and
    the properties through kernel.compose_array.
    """
    sampling = sampling or Sampling()
    report = RunReport(sampling=sampling)
    report.vectors = run_vectors(vector_kernel or kernel.compose)
    for prop in registry.discover().values():
        report.properties.append(prop.verify(property_kernel or kernel.compose_array, sampling))
    return report


def exit_status(report: RunReport) -> int:
    """0 when everything passed, else the number of distinct failing checks (at most 255)."""
    if report.passed:
        return 0
    return min(max(report.failed_checks, 1), MAX_EXIT_STATUS)
