"""Entry point for the SkillGraph API server.

Usage:
    python run_server.py --port 8000
"""

import argparse
import logging


def main() -> None:
    parser = argparse.ArgumentParser(description="SkillGraph API server")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Interface to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--log-level", type=str, default="info", help="Log level")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    import uvicorn
    from skillgraph.main import app

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
