from .actor import check_human_actor
from .permissions import check_write_permissions
from .trigger import check_trigger_action

__all__ = ["check_human_actor", "check_trigger_action", "check_write_permissions"]
