"""CLI entry point for the webhook server."""

import argparse
import os

from cashier_fastspring.config import settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="cashier-fastspring-server",
        description="FastSpring webhook receiver",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument(
        "--no-audit",
        action="store_true",
        help="Do not keep a copy of raw webhook bodies",
    )
    args = parser.parse_args(argv)

    if args.no_audit:
        os.environ["FASTSPRING_PAYLOAD_AUDIT_DIR"] = ""

    import uvicorn

    uvicorn.run("cashier_fastspring.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
