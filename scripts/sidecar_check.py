#!/usr/bin/env python3
"""Live Dapr sidecar check.

Runs a short sequence of calls against a running sidecar and reports
which ones succeeded:

1) health check,
2) save + get state round-trip (``--state-store``),
3) publish a test event (``--pubsub`` / ``--topic``),
4) fetch a secret (``--secret-store`` / ``--secret-key``).

Steps whose options are omitted are skipped. The sidecar port comes from
``DAPR_HTTP_PORT`` unless ``--address`` is given.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import uuid
from dataclasses import dataclass
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pydapr import DaprClient, DaprConfig, DaprError, DaprSidecarNotPresentError, StateRecord  # noqa: E402
from pydapr._redact import redact_secret_document  # noqa: E402


@dataclass(frozen=True)
class CheckResult:
    name: str
    ok: bool
    detail: str


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check a running Dapr sidecar")
    parser.add_argument("--address", default=None, help="Sidecar address, e.g. http://localhost:3500")
    parser.add_argument("--state-store", default=None, help="State store used for a save/get round-trip.")
    parser.add_argument("--pubsub", default=None, help="Pub/sub component to publish a test event to.")
    parser.add_argument("--topic", default="pydapr-check", help="Topic for the test event.")
    parser.add_argument("--secret-store", default=None, help="Secret store to read from.")
    parser.add_argument("--secret-key", default=None, help="Secret key to read.")
    parser.add_argument(
        "--show-secrets",
        action="store_true",
        help="Print secret values instead of redacting them.",
    )
    return parser.parse_args()


def _print_results(results: list[CheckResult]) -> None:
    width = max((len(result.name) for result in results), default=10)
    for result in results:
        status = "OK" if result.ok else "FAIL"
        print(f"{result.name.ljust(width)}  {status:<4}  {result.detail}")
    failures = [result for result in results if not result.ok]
    print("-" * (width + 24))
    print(f"Summary: {len(results) - len(failures)} OK, {len(failures)} FAIL")


async def _run(args: argparse.Namespace) -> int:
    config = DaprConfig.from_env()
    results: list[CheckResult] = []

    async with DaprClient(config) as client:
        try:
            await client.health_check(dapr_address=args.address)
            results.append(CheckResult("health", True, "sidecar is healthy"))
        except DaprSidecarNotPresentError as exc:
            print(f"No sidecar at {args.address or client.default_address}: {exc.message}")
            return 2
        except DaprError as exc:
            results.append(CheckResult("health", False, str(exc)))

        if args.state_store:
            key = f"pydapr-check-{uuid.uuid4().hex[:8]}"
            value = {"check": key}
            try:
                await client.save_state(args.state_store, [StateRecord(key=key, value=value)], dapr_address=args.address)
                record = await client.get_state(args.state_store, key, dapr_address=args.address)
                ok = record.json_value() == value
                results.append(CheckResult("state.roundtrip", ok, f"key={key} etag={record.etag!r}"))
                await client.delete_state(args.state_store, key, dapr_address=args.address)
            except DaprError as exc:
                results.append(CheckResult("state.roundtrip", False, str(exc)))

        if args.pubsub:
            payload = json.dumps({"source": "pydapr-check"})
            try:
                await client.publish_event(args.pubsub, args.topic, payload, dapr_address=args.address)
                results.append(CheckResult("pubsub.publish", True, f"topic={args.topic}"))
            except DaprError as exc:
                results.append(CheckResult("pubsub.publish", False, str(exc)))

        if args.secret_store and args.secret_key:
            try:
                document = await client.get_secret(args.secret_store, args.secret_key, dapr_address=args.address)
                shown = document if args.show_secrets else redact_secret_document(document)
                results.append(CheckResult("secrets.get", True, json.dumps(shown, sort_keys=True)))
            except DaprError as exc:
                results.append(CheckResult("secrets.get", False, str(exc)))

    _print_results(results)
    return 0 if all(result.ok for result in results) else 1


def main() -> int:
    args = _parse_args()
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
