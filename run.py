#!/usr/bin/env python3
"""
Roulette Spin Analytics - Entry Point
Start the Flask + SocketIO server.
"""

import os
import sys

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import HOST, PORT, DEBUG, SOCKETIO_ASYNC_MODE

from spin_analytics import create_app, socketio

app = create_app()

if __name__ == '__main__':
    print("=" * 60)
    print("  Roulette Spin Analytics v1.0")
    print("=" * 60)
    print(f"  Server:    http://localhost:{PORT}")
    print(f"  Async:     {SOCKETIO_ASYNC_MODE}")
    print(f"  Debug:     {DEBUG}")
    print("=" * 60)
    print()

    socketio.run(app, host=HOST, port=PORT, debug=DEBUG, use_reloader=False)
