from .branch import setup_branch
from .comments import create_initial_comment, update_tracking_comment

__all__ = ["create_initial_comment", "setup_branch", "update_tracking_comment"]
