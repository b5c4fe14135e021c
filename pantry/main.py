import logging
import socket

import uvicorn

from pantry.utilities.config import APP_HOST, APP_PORT, DEBUG


def get_local_ip() -> str:
    """Best-effort LAN address so phones (barcode scanning) can reach the app."""
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # No packet is sent; connect() only selects the outgoing interface
        s.connect(("8.8.8.8", 80))
        return str(s.getsockname()[0])
    except OSError:
        return "127.0.0.1"
    finally:
        s.close()


def main():
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    from pantry.api.api_run import app

    local_ip = get_local_ip()
    print(f"Smart Pantry running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    if local_ip != "127.0.0.1":
        print(f"Accessible from other devices at: http://{local_ip}:{APP_PORT}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)


if __name__ == "__main__":
    main()
