from __future__ import annotations

import argparse

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Crew Dashboard API server")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    parser.add_argument("--port", type=int, default=5000, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    args = parser.parse_args()

    # Single worker: metrics and the store live in this process only.
    uvicorn.run("crew_dashboard.main:app", host=args.host, port=args.port, reload=bool(args.reload), workers=1)


if __name__ == "__main__":
    main()
