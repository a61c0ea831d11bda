#!/usr/bin/env python3
"""
Dev helper: upload a PDF to a running PDF Summary Mailer backend.

POST-s a PDF to the /upload endpoint as multipart form data and prints the
response.

Usage
-----
# Send a file to localhost:3000
python scripts/send_test_upload.py --email you@example.com --file path/to/doc.pdf

# Target a different backend URL
python scripts/send_test_upload.py --email you@example.com --file doc.pdf --url http://staging.example.com
"""

import argparse
import json
import sys
from pathlib import Path

import httpx


def _print_response(response: httpx.Response) -> None:
    print(f"HTTP {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)


def main() -> int:
    parser = argparse.ArgumentParser(description="Upload a PDF to the summary mailer.")
    parser.add_argument("--url", default="http://localhost:3000", help="Backend base URL")
    parser.add_argument("--name", default="Test User", help="Submitter name")
    parser.add_argument("--email", required=True, help="Where the summary should be sent")
    parser.add_argument("--file", type=Path, required=True, help="PDF to upload")
    parser.add_argument("--timeout", type=float, default=120.0, help="Request timeout in seconds")
    args = parser.parse_args()

    if not args.file.exists():
        print(f"File not found: {args.file}", file=sys.stderr)
        return 1
    content = args.file.read_bytes()

    endpoint = args.url.rstrip("/") + "/upload"
    print(f"POST {endpoint} ({args.file.name}, {len(content)} bytes)")

    try:
        response = httpx.post(
            endpoint,
            data={"name": args.name, "email": args.email},
            files={"pdf": (args.file.name, content, "application/pdf")},
            timeout=args.timeout,
        )
    except httpx.HTTPError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1

    _print_response(response)
    return 0 if response.is_success else 1


if __name__ == "__main__":
    sys.exit(main())
