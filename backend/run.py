#!/usr/bin/env python3
"""
Entry point for running the Cashflow Planner server.

Usage:
    python run.py [--port PORT] [--host HOST] [--log-level LEVEL]
"""

import argparse
import logging
import webbrowser
import qrcode
import uvicorn


def print_qr_code(url: str) -> None:
    """Print a QR code to the terminal."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=1,
        border=1,
    )
    qr.add_data(url)
    qr.make(fit=True)

    # Print QR code using ASCII
    qr.print_ascii(invert=True)


def main():
    parser = argparse.ArgumentParser(description="Cashflow Planner")
    parser.add_argument("--port", type=int, default=8000, help="Port to run on")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--no-browser", action="store_true", help="Don't open browser")
    parser.add_argument("--no-qr", action="store_true", help="Don't print a QR code")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level for the server and the projection engine",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    url = f"http://{args.host}:{args.port}"

    print("\n" + "=" * 50)
    print("  Cashflow Planner")
    print("=" * 50)
    print(f"\n  URL: {url}\n")

    if not args.no_qr:
        print_qr_code(url)

    print("\n  Press Ctrl+C to stop the server\n")
    print("=" * 50 + "\n")

    if not args.no_browser:
        webbrowser.open(url)

    uvicorn.run(
        "planner.main:app",
        host=args.host,
        port=args.port,
        reload=True,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
