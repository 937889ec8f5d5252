import json
from typing import Iterable, List, Optional

from models import FetchResult, Finding, Fingerprint

# takeover fingerprints, index order is report order
TAKEOVER_FINGERPRINTS = (
    Fingerprint("AWS", "NoSuchBucket"),
    Fingerprint("GitHub Pages", "There isn't a GitHub Pages site here."),
    Fingerprint("Readme.io", "Project doesnt exist... yet!"),
)

def classify(fp: Fingerprint, result: FetchResult) -> Optional[Finding]:
    if not result.ok:
        return None
    if fp.status is not None and result.status not in fp.status:
        return None
    if fp.body.encode("utf-8") in (result.body or b""):
        return Finding(fp.name, result.host, result.status)
    return None

def classify_all(result: FetchResult, fingerprints: Iterable[Fingerprint] = TAKEOVER_FINGERPRINTS) -> List[Finding]:
    out = []
    for fp in fingerprints:
        f = classify(fp, result)
        if f:
            out.append(f)
    return out

def load_fingerprints(path: str) -> List[Fingerprint]:
    """Read extra fingerprints from a JSON list of {"name", "body", "status"?} objects."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of fingerprints")
    out: List[Fingerprint] = []
    for i, row in enumerate(data):
        if not isinstance(row, dict):
            raise ValueError(f"{path}[{i}]: expected an object")
        name, body = row.get("name"), row.get("body")
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"{path}[{i}]: missing 'name'")
        if not isinstance(body, str) or not body:
            raise ValueError(f"{path}[{i}]: missing 'body'")
        status = row.get("status")
        if status is not None:
            if isinstance(status, int):
                status = [status]
            if not isinstance(status, list) or not all(isinstance(s, int) for s in status):
                raise ValueError(f"{path}[{i}]: 'status' must be an int or a list of ints")
            status = tuple(status)
        out.append(Fingerprint(name.strip(), body, status))
    return out
