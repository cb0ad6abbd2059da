import argparse
import os
import sys

from dotenv import load_dotenv

from zoom_receiver.probe import probe


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Send a Zoom url_validation challenge to a receiver and verify the reply."
    )
    parser.add_argument("url", nargs="?", default=None, help="Receiver URL (default http://127.0.0.1:$PORT/)")
    parser.add_argument("--token", default=None, help="plainToken to send (random if omitted)")
    parser.add_argument("--timeout", type=float, default=10.0)
    return parser.parse_args()


def main() -> None:
    load_dotenv(override=False)
    args = parse_args()
    url = args.url or f"http://127.0.0.1:{os.getenv('PORT', '3000')}/"

    result = probe(
        url,
        secret=os.getenv("ZOOM_VERIFICATION_TOKEN", "").strip(),
        plain_token=args.token,
        username=os.getenv("BASIC_AUTH_USERNAME"),
        password=os.getenv("BASIC_AUTH_PASSWORD"),
        header_name=os.getenv("CUSTOM_HEADER_NAME"),
        header_value=os.getenv("CUSTOM_HEADER_VALUE"),
        timeout=args.timeout,
    )

    print(f"Probe {url}: {'OK' if result.ok else 'FAILED'} ({result.status_code}) {result.message}")
    if result.expected is not None:
        print(f"  expected: {result.expected}")
        print(f"  received: {result.received}")
    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
