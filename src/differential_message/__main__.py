"""Module entrypoint.

Allows:
    python -m differential_message
"""

from __future__ import annotations

from differential_message.server.mcp_server import main

if __name__ == "__main__":
    main()
