#!/usr/bin/env python3
"""Verify and decrypt a captured callback message.

Reads the JSON body the platform POSTed to the callback URL (from a file
or stdin) and prints the decrypted payload.

Credential sourcing:
- BYTEDANCE_COMPONENT_TOKEN (or --token)
- BYTEDANCE_ENCODING_AES_KEY (or --aes-key)
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pybytedance import ByteDanceError, CallbackEnvelope, compute_signature, open_callback  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("path", nargs="?", help="File holding the callback JSON (default: stdin)")
    parser.add_argument("--token", default=os.environ.get("BYTEDANCE_COMPONENT_TOKEN"))
    parser.add_argument("--aes-key", default=os.environ.get("BYTEDANCE_ENCODING_AES_KEY"))
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if not args.token or not args.aes_key:
        print("error: token and AES key are required", file=sys.stderr)
        return 2

    raw = Path(args.path).read_bytes() if args.path else sys.stdin.buffer.read()

    try:
        payload = open_callback(raw, token=args.token, encoding_aes_key=args.aes_key)
    except ByteDanceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        try:
            envelope = CallbackEnvelope.model_validate_json(raw)
        except ValueError:
            return 1
        expected = compute_signature(args.token, envelope.timestamp, envelope.nonce, envelope.encrypt)
        print(f"expected signature: {expected}", file=sys.stderr)
        print(f"received signature: {envelope.msg_signature}", file=sys.stderr)
        return 1

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
