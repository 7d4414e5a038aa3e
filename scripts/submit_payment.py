"""Submit one payment to the service and print the JSON response.

Handy for smoke-testing a deployment. Fields can be given as flags or as a
raw JSON body with --json / --file.
"""

import argparse
import json
from pathlib import Path

import httpx


def build_payload(args: argparse.Namespace) -> dict:
    """Assemble the request body from flags, dropping unset optional fields."""

    if args.json_inline:
        return json.loads(args.json_inline)
    if args.json_file:
        return json.loads(Path(args.json_file).read_text())
    payload = {
        "amount": args.amount,
        "paymentMode": args.payment_mode,
        "clientEmail": args.client_email,
        "clientName": args.client_name,
        "route": args.route,
        "cardLast4": args.card_last4,
        "cardBrand": args.card_brand,
    }
    return {k: v for k, v in payload.items() if v is not None}


def main() -> None:
    """Parse CLI args, POST one payment, print status and body."""

    parser = argparse.ArgumentParser(description="Submit one payment to POST /payments.")
    parser.add_argument("--base-url", default="http://localhost:3002")
    parser.add_argument("--amount", default="100")
    parser.add_argument("--payment-mode", default="credit", choices=["credit", "debit"])
    parser.add_argument("--client-email", default="test@example.com")
    parser.add_argument("--client-name", default="Test User")
    parser.add_argument("--route", default="Paris-Lyon")
    parser.add_argument("--card-last4", default=None)
    parser.add_argument("--card-brand", default=None)
    parser.add_argument("--json", dest="json_inline", default=None, help="Inline JSON body, overrides field flags")
    parser.add_argument("--file", dest="json_file", default=None, help="Path to JSON body, overrides field flags")
    args = parser.parse_args()

    if args.json_inline and args.json_file:
        raise SystemExit("Provide at most one of --json or --file")

    resp = httpx.post(f"{args.base_url}/payments", json=build_payload(args), timeout=10.0)
    print(f"status={resp.status_code}")
    print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
