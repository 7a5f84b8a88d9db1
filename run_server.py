"""Development server for the LeafCare API."""

import os
import sys

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

from app import create_app

app = create_app()

# Get port from environment or use default
port = int(os.environ.get("FLASK_RUN_PORT", 8000))


def main() -> None:
    print(f"Server starting on http://0.0.0.0:{port}")
    print("Press Ctrl+C to stop\n")
    try:
        app.run(host="0.0.0.0", port=port, debug=False, use_reloader=False)
    except KeyboardInterrupt:
        print("\nServer stopped by user")


if __name__ == "__main__":
    main()
