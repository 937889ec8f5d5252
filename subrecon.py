import argparse, asyncio, logging, sys
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from fetcher import build_client, fetch_one
from fingerprints import TAKEOVER_FINGERPRINTS, classify_all, load_fingerprints
from models import FetchResult, Finding, Fingerprint, ScanConfig, ScanReport
from report import save_json, write_report

BANNER = r'''
   ____        _     ____
  / ___| _   _| |__ |  _ \ ___  ___ ___  _ __
  \___ \| | | | '_ \| |_) / _ \/ __/ _ \| '_ \
   ___) | |_| | |_) |  _ <  __/ (_| (_) | | | |
  |____/ \__,_|_.__/|_| \_\___|\___\___/|_| |_|

              subdomain takeover checks (v1.1)
'''

console = Console()
log = logging.getLogger("subrecon")

OnResult = Callable[[FetchResult, List[Finding], int, int], None]

def banner(silent=False, subtitle="AWS S3 • GitHub Pages • Readme.io"):
    if not silent:
        console.print(Panel.fit(BANNER, border_style="cyan", title="SubRecon", subtitle=subtitle))

def setup_logging(silent=False, verbose=False):
    level = logging.DEBUG if verbose else (logging.WARNING if silent else logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING if not verbose else logging.DEBUG)

def normalize_host(line: str) -> str:
    s = (line or "").strip()
    if not s:
        return ""
    # prefix check, a scheme later in the line (e.g. ?next=http://x) does not count
    low = s.lower()
    if not (low.startswith("http://") or low.startswith("https://")):
        s = "http://" + s
    return s

def unique(seq: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    out: List[str] = []
    for x in seq:
        x = x.strip()
        if x and x not in seen:
            seen.add(x)
            out.append(x)
    return out

def load_hosts(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        return unique(normalize_host(line) for line in f)

# ---------------- Core ----------------
async def scan(
    hosts: Sequence[str],
    client: httpx.AsyncClient,
    *,
    fingerprints: Sequence[Fingerprint] = TAKEOVER_FINGERPRINTS,
    config: Optional[ScanConfig] = None,
    on_result: Optional[OnResult] = None,
) -> ScanReport:
    """Fetch every host once and classify each response against ``fingerprints``.

    Fetches run concurrently, at most ``config.concurrency`` at a time. Results
    are consumed here as they complete, so the findings map has a single writer.
    Findings come back ordered by fingerprint, then by position in ``hosts``.
    """
    config = config or ScanConfig()
    report = ScanReport(total=len(hosts))
    found: Dict[Tuple[str, str], Finding] = {}
    sem = asyncio.Semaphore(max(1, config.concurrency))

    async def task(h):
        async with sem:
            return await fetch_one(client, h, config.timeout)

    tasks = [asyncio.ensure_future(task(h)) for h in hosts]
    try:
        for fut in asyncio.as_completed(tasks):
            result = await fut
            report.completed += 1
            new: List[Finding] = []
            if result.ok:
                for f in classify_all(result, fingerprints):
                    if f.key not in found:
                        found[f.key] = f
                        new.append(f)
            else:
                report.failures.append(result)
                log.info("[!] %s: %s", result.host, result.error)
            if on_result:
                on_result(result, new, report.completed, report.total)
    finally:
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    rank: Dict[str, int] = {}
    for i, fp in enumerate(fingerprints):
        rank.setdefault(fp.name, i)
    order = {h: i for i, h in enumerate(hosts)}
    report.findings = sorted(found.values(), key=lambda f: (rank.get(f.service, len(rank)), order.get(f.host, len(order))))
    return report

async def main_async(args, hosts: List[str], fingerprints: Sequence[Fingerprint]) -> int:
    config = ScanConfig(
        concurrency=args.concurrency,
        timeout=args.timeout,
        connect_timeout=args.connect_timeout,
    )
    if not args.silent:
        console.print(f"[green]Total hosts:[/green] {len(hosts)}")
        console.rule("[bold cyan]Checking")

    async with build_client(config) as client:
        with Progress(SpinnerColumn(), BarColumn(), TextColumn("[progress.percentage]{task.percentage:>3.0f}%"), TimeElapsedColumn(), TextColumn("{task.completed}/{task.total} hosts completed"), transient=True, disable=args.silent, console=console) as progress:
            t = progress.add_task("Checking", total=len(hosts))

            def on_result(result, new, completed, total):
                for f in new:
                    console.print(f"[bold red][>][/bold red] Potential {escape(f.service)} takeover on [cyan]{escape(f.host)}[/cyan] (status {f.status})")
                progress.update(t, completed=completed)

            report = await scan(hosts, client, fingerprints=fingerprints, config=config, on_result=on_result)

    if not args.silent:
        console.rule("[bold cyan]Summary")
        console.print(f"[green]Completed:[/green] {report.completed}/{report.total}  "
                      f"[red]Findings:[/red] {len(report.findings)}  "
                      f"[yellow]Failed:[/yellow] {len(report.failures)}")

    code = 0
    try:
        write_report(args.output, report)
        if not args.silent: console.print(f"[bold green]Saved findings:[/bold green] {args.output}")
    except OSError as e:
        log.error("Unable to write output file %s: %s", args.output, e)
        code = 1
    if args.json:
        try:
            save_json(args.json, report)
            if not args.silent: console.print(f"[bold green]Saved JSON:[/bold green] {args.json}")
        except OSError as e:
            log.error("Unable to write JSON report %s: %s", args.json, e)
            code = 1
    if not args.silent:
        console.print("[*] Takeover check completed.")
    return code

def parse(argv=None):
    p = argparse.ArgumentParser(
        prog="subrecon",
        description="SubRecon: subdomain takeover checks against known unclaimed-resource pages",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("-i", "--input", required=True, help="Hosts file (one per line)")
    p.add_argument("-o", "--output", required=True, help="Findings output file")
    p.add_argument("-c", "--concurrency", type=int, default=100, help="Max concurrent requests")
    p.add_argument("--timeout", type=float, default=10.0, help="Overall request timeout (seconds)")
    p.add_argument("--connect-timeout", type=float, default=15.0, help="Connect + TLS handshake timeout (seconds)")
    p.add_argument("--fingerprints", help="Extra fingerprints JSON file ([{\"name\":..., \"body\":...}])")
    p.add_argument("--json", help="Also save a JSON report to this path")
    p.add_argument("--silent", action="store_true", help="Minimal console output")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = p.parse_args(argv)
    if args.concurrency < 1:
        p.error("--concurrency must be at least 1")
    if args.timeout <= 0 or args.connect_timeout <= 0:
        p.error("timeouts must be positive")
    return args

def main(argv=None) -> int:
    args = parse(argv)
    setup_logging(args.silent, args.verbose)
    banner(args.silent)
    fingerprints = list(TAKEOVER_FINGERPRINTS)
    if args.fingerprints:
        try:
            fingerprints += load_fingerprints(args.fingerprints)
        except (OSError, ValueError) as e:
            console.print(f"[red]Unable to load fingerprints:[/red] {escape(str(e))}")
            return 1
    try:
        hosts = load_hosts(args.input)
    except OSError as e:
        console.print(f"[red]Unable to read hosts file:[/red] {escape(str(e))}")
        return 1
    return asyncio.run(main_async(args, hosts, fingerprints))

if __name__ == "__main__":
    sys.exit(main())
