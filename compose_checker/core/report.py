"""Report builder: text and JSON output for compose-check results."""

import json
from typing import Any

from compose_checker.core.types import PropertyTally, RunReport, VectorResult

RULE = '=' * 60


def _vector_lines(results: list[VectorResult]) -> list[str]:
    lines = [f'Running {len(results)} sRGB composition tests...', '']
    for r in results:
        v = r.vector
        if r.passed:
            lines.append(f'PASS [{r.index}]: {v.description}')
        else:
            lines.append(f'FAIL [{r.index}]: {v.description}')
            lines.append(f'  compose({v.foreground}, {v.alpha}, {v.background}) = {r.computed}, expected {v.expected}')
    lines.append('')

    failed = sum(1 for r in results if not r.passed)
    if failed == 0:
        lines.append(f'All {len(results)} tests passed.')
    else:
        lines.append(f'{failed} of {len(results)} tests FAILED.')
    return lines


def _property_lines(tally: PropertyTally) -> list[str]:
    lines = [f'Property {tally.order}: {tally.claim}']
    if tally.passed:
        lines.append(f'  PASS ({tally.checked} samples)')
        return lines

    lines.append(f'  FAIL: {tally.violations} violation(s) in {tally.checked} samples')
    for f in tally.failures:
        fg, alpha, bg = f.sample
        lines.append(f'  FAIL: compose({fg}, {alpha}, {bg}) = {f.computed}, expected {f.expected}')
    hidden = tally.violations - len(tally.failures)
    if hidden > 0:
        lines.append(f'  ... {hidden} more not shown')
    return lines


def format_text(report: RunReport) -> str:
    """Format report as human-readable text."""
    lines = ['compose-check: sRGB alpha composition kernel', RULE, '']
    lines.extend(_vector_lines(report.vectors))
    lines.append('')

    lines.append('Verifying formula properties...')
    lines.append('')
    for tally in report.properties:
        lines.extend(_property_lines(tally))
    lines.append('')
    if report.property_violations == 0:
        lines.append('All formula properties verified.')
    else:
        lines.append(f'{report.property_violations} property violations found.')

    lines.append('')
    lines.append(RULE)
    if report.passed:
        lines.append('SUCCESS: All tests passed.')
    else:
        lines.append(f'FAILURE: {report.failure_count} test(s) failed.')
    return '\n'.join(lines)


def format_json(report: RunReport) -> str:
    """Format report as JSON."""
    s = report.sampling
    obj: dict[str, Any] = {
        'sampling': {
            'identity_stride': s.identity_stride,
            'closure_bg_stride': s.closure_bg_stride,
            'monotonic_fg_stride': s.monotonic_fg_stride,
            'monotonic_alpha_stride': s.monotonic_alpha_stride,
        },
    }

    obj['vectors'] = []
    for r in report.vectors:
        v = r.vector
        obj['vectors'].append(
            {
                'index': r.index,
                'description': v.description,
                'input': list(v.sample),
                'expected': v.expected,
                'computed': r.computed,
                'pass': r.passed,
            }
        )

    obj['properties'] = []
    for t in report.properties:
        obj['properties'].append(
            {
                'name': t.name,
                'claim': t.claim,
                'checked': t.checked,
                'violations': t.violations,
                'pass': t.passed,
                'failures': [
                    {'input': list(f.sample), 'computed': f.computed, 'expected': f.expected} for f in t.failures
                ],
            }
        )

    obj['summary'] = {
        'vectors': len(report.vectors),
        'vector_failures': report.vector_failures,
        'property_violations': report.property_violations,
        'failed_checks': report.failed_checks,
        'pass': report.passed,
    }
    return json.dumps(obj, indent=2)
