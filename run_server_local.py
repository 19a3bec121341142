"""
Special function for running the resume builder API locally whenever required.

Simply run python run_server_local.py in the terminal to launch the server
and begin hosting the swagger UI at `http://0.0.0.0:8001/docs`.
Host and port can be overridden with the HOST / PORT environment variables.
"""
import os
import signal
import sys

import uvicorn
from dotenv import load_dotenv

load_dotenv()


def main():
    # Use Uvicorn programmatically for proper cleanup on Ctrl+C
    config = uvicorn.Config(
        "api.server:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8001")),
        reload=os.getenv("ENV", "development") == "development",
    )
    server = uvicorn.Server(config)

    def handle_exit(sig, frame):
        print("\nShutting down gracefully...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_exit)
    signal.signal(signal.SIGTERM, handle_exit)

    server.run()
    print("Server stopped cleanly.")

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nKeyboard interrupt received. Exiting...")
        sys.exit(0)
