"""Report builder — text and JSON output for mix-tool results."""

import json
import os
from typing import Any

from mix_checker.core.types import Report


def _fmt_rgb(rgb: list[float]) -> str:
    return '(' + ', '.join(f'{c:g}' for c in rgb) + ')'


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    header = f'mix-tool {report.command}: {report.recipe_path}'
    if report.target_path:
        header += f' → {os.path.basename(report.target_path)}'
    lines.append(header)
    lines.append('')

    for name, data in report.recipes.items():
        lines.append(f'── {name}')
        if 'error' in data:
            lines.append(f'  error: {data["error"]}')
        if 'mixed' in data:
            lines.append(f'  mixed:  {data["mixed"]["hex"]}  rgb{_fmt_rgb(data["mixed"]["rgb"])}')
            nearest = data['mixed'].get('nearest')
            if nearest:
                lines.append(f'  nearest: {nearest}')
        if 'target_mixed' in data:
            lines.append(f'  target: {data["target_mixed"]["hex"]}  rgb{_fmt_rgb(data["target_mixed"]["rgb"])}')
        if 'equal' in data:
            lines.append(f'  equal: {"yes" if data["equal"] else "no"}')
        if 'score' in data:
            line = f'  score: {data["score"]}'
            if data.get('exact_match'):
                line += ' (exact match)'
            else:
                line += f'  colour={data["color_similarity"]:.1f}  proportion={data["proportion_match"]:.1f}'
            if 'pass' in data:
                line += '  ✓' if data['pass'] else '  ✗'
            lines.append(line)
        if 'swatch' in data:
            lines.append(f'  swatch: {data["swatch"]}')
        lines.append('')

    total = report.pass_count + report.fail_count
    if total > 0:
        lines.append(
            f'PASS {report.pass_count}/{total} recipes  FAIL {report.fail_count}/{total} recipes'
            f'  (threshold {report.threshold:g})'
        )
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'command': report.command,
        'recipe': report.recipe_path,
    }
    if report.target_path:
        obj['target'] = report.target_path
    if report.threshold is not None:
        obj['threshold'] = report.threshold

    obj['recipes'] = [{'name': name, **data} for name, data in report.recipes.items()]
    obj['summary'] = {
        'total': report.pass_count + report.fail_count,
        'pass': report.pass_count,
        'fail': report.fail_count,
    }
    return json.dumps(obj, indent=2)
