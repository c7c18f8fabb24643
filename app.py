#!/usr/bin/env python3
"""sip-validate server: REST API over the SIP preamble validator."""

import argparse

from flask import Flask

from config import PORT, SIP_DIR

app = Flask(__name__)

from routes.validate import bp as validate_bp  # noqa: E402

app.register_blueprint(validate_bp)


def main():
    """Entry point for `sip-validate-server` CLI command."""
    parser = argparse.ArgumentParser(description="sip-validate server")
    parser.add_argument(
        "--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})"
    )
    cli_args = parser.parse_args()

    print("\n  sip-validate server v0.1.0")
    print(f"  Port: {cli_args.port}")
    print(f"  SIP dir: {SIP_DIR}\n")

    app.run(port=cli_args.port, threaded=True)


if __name__ == "__main__":
    main()
