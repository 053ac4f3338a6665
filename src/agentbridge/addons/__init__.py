"""AgentBridge addons — typed proxies for remote addon actions.

- ActionProxy / input_field / output_field: declare an action's fields
- ActionExecutor: sends a proxy to the Agent and binds the result
- ActionBinder: writes output values back onto the proxy
- coerce / FieldKind: wire-string to scalar conversion
"""

from agentbridge.addons.binder import ActionBinder
from agentbridge.addons.coercion import FieldKind, InvalidFormatError, coerce
from agentbridge.addons.executor import ActionExecutor, AddonsHelper, RemoteExecutionError
from agentbridge.addons.proxy import (
    ActionDescriptor,
    ActionField,
    ActionProxy,
    Locator,
    input_field,
    output_field,
)

__all__ = [
    "ActionBinder",
    "ActionDescriptor",
    "ActionExecutor",
    "ActionField",
    "ActionProxy",
    "AddonsHelper",
    "FieldKind",
    "InvalidFormatError",
    "Locator",
    "RemoteExecutionError",
    "coerce",
    "input_field",
    "output_field",
]
