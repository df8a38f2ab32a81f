"""Cast, call and timer helpers for asyncio actors, with call results and payload encoding."""

__version__ = "0.1.0"
__all__ = ["serialization", "call_result", "rpc", "timers"]