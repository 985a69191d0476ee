"""Diagnostics report output."""

from pathlib import Path
from typing import Dict, Optional
import json
import math


def _json_safe(value):
    # NaN/inf are not valid JSON
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def save_report(report: Dict, output_path: Path) -> None:
    """
    Save a normalization report to JSON file.

    Non-finite floats are written as null.

    Args:
        report: Report dictionary to save
        output_path: Path to output JSON file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(_json_safe(report), f, indent=2, ensure_ascii=False)
        f.write('\n')


def load_report(report_path: Path) -> Optional[Dict]:
    """
    Load a normalization report.

    Args:
        report_path: Path to report JSON file

    Returns:
        Loaded report dictionary, or None if the file does not exist
    """
    report_path = Path(report_path)
    if not report_path.exists():
        return None

    with open(report_path, 'r', encoding='utf-8') as f:
        return json.load(f)
