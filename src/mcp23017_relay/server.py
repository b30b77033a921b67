"""MCP server entry point for the relay board.

Exposes the relay commands as tools and the device configuration as a
resource via the Model Context Protocol with stdio transport. Every tool
call takes the same device lock as the CLI, so both can be used against
one board at the same time.

Tools are synchronous: while another holder has the device lock a call
blocks the stdio loop for up to LOCK_TIMEOUT_S seconds before failing.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import DEFAULT_ADDRESS, DEFAULT_LOCK_PATH, LOCK_TIMEOUT_S
from .controller import read_relays, run_command
from .errors import RelayError

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "mcp23017-relay",
    instructions="Switch relays driven by an MCP23017/MCP23008 I/O expander",
)

_address = DEFAULT_ADDRESS
_lock_path = DEFAULT_LOCK_PATH


# ─── RELAY TOOLS ─────────────────────────────────────────────────────

@mcp.tool()
def init_relays(state: str) -> dict[str, Any]:
    """Configure every expander pin as an output and set all relays.

    This overwrites the state of all eight relays. Blocks for up to 2 s
    while another command holds the device lock.

    Args:
        state: 'on' or 'off'.
    """
    try:
        bank = run_command(["init", state], _address, _lock_path, LOCK_TIMEOUT_S)
    except RelayError as e:
        logger.warning("init_relays failed: %s", e)
        return {"error": str(e)}
    return {"initialized": True, **bank.to_dict()}


@mcp.tool()
def set_relay(relay: int, state: str) -> dict[str, Any]:
    """Switch a single relay, leaving the other seven untouched.

    The board must have been initialized with init_relays first. Blocks
    for up to 2 s while another command holds the device lock.

    Args:
        relay: Relay number (0-7).
        state: 'on' or 'off'.
    """
    try:
        bank = run_command([str(relay), state], _address, _lock_path, LOCK_TIMEOUT_S)
    except RelayError as e:
        logger.warning("set_relay failed: %s", e)
        return {"error": str(e)}
    return {"relay": relay, "state": state, **bank.to_dict()}


@mcp.tool()
def get_relays() -> dict[str, Any]:
    """Read the current state of all eight relays from the device.

    Blocks for up to 2 s while another command holds the device lock.
    """
    try:
        bank = read_relays(_address, _lock_path, LOCK_TIMEOUT_S)
    except RelayError as e:
        logger.warning("get_relays failed: %s", e)
        return {"error": str(e)}
    return bank.to_dict()


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("mcp23017://device/config")
def resource_device_config() -> str:
    """Bus, device address, register offsets and lock file in use."""
    return json.dumps({
        **_address.to_dict(),
        "lock_path": _lock_path,
        "lock_timeout_s": LOCK_TIMEOUT_S,
    })


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
