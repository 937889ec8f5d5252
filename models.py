from dataclasses import dataclass, field
from typing import List, Optional, Tuple

UA = "SubRecon/1.1"

@dataclass(frozen=True)
class Fingerprint:
    name: str                                  # service label, e.g. "AWS"
    body: str                                  # substring of the unclaimed-resource page
    status: Optional[Tuple[int, ...]] = None   # restrict to these status codes when set

@dataclass(frozen=True)
class FetchResult:
    host: str
    body: bytes = b""
    status: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

@dataclass(frozen=True)
class Finding:
    service: str
    host: str
    status: Optional[int] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.service, self.host)

    def line(self) -> str:
        return f"[+] {self.service}: {self.host}"

@dataclass
class ScanReport:
    total: int
    completed: int = 0
    findings: List[Finding] = field(default_factory=list)
    failures: List[FetchResult] = field(default_factory=list)

@dataclass
class ScanConfig:
    concurrency: int = 100
    timeout: float = 10.0          # whole request
    connect_timeout: float = 15.0  # TCP connect + TLS handshake
    keepalive: float = 15.0
    user_agent: str = UA
