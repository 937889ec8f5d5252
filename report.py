import json, os
from typing import Any, Dict

from models import ScanReport

def _ensure_parent(path: str):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

def write_report(path: str, report: ScanReport):
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8") as f:
        for finding in report.findings:
            f.write(finding.line() + "\n")

def report_dict(report: ScanReport) -> Dict[str, Any]:
    return {
        "total": report.total,
        "completed": report.completed,
        "findings": [{"service": f.service, "host": f.host, "status": f.status} for f in report.findings],
        "failures": [{"host": r.host, "error": r.error} for r in report.failures],
    }

def save_json(path: str, report: ScanReport):
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report_dict(report), f, ensure_ascii=False, indent=2)
