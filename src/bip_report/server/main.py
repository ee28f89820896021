"""Main entry point for the BI Publisher report server.

``main()`` is registered as the ``bip-report-server`` console script in
pyproject.toml and serves the combined FastAPI/FastMCP application with
uvicorn.
"""

import argparse

import uvicorn


def main() -> None:
    """Start the report server using uvicorn.

    Configuration:
        - host: --host argument (default: 127.0.0.1)
        - port: --port argument (default: 8000)
        - config file: BIP_REPORT_CONFIG environment variable

    Usage:
        bip-report-server --port 8080
    """
    parser = argparse.ArgumentParser(description="Start the BI Publisher report server")
    parser.add_argument(
        "--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port", type=int, default=8000, help="Port to run the server on (default: 8000)"
    )
    args = parser.parse_args()

    uvicorn.run(
        "bip_report.server.app:build_app",
        factory=True,
        host=args.host,
        port=args.port,
    )


if __name__ == "__main__":
    main()
