from .config import prepare_mcp_config

__all__ = ["prepare_mcp_config"]
