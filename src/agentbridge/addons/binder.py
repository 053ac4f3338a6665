"""Writes an execution result's output fields back onto the action proxy."""

from __future__ import annotations

import logging
from typing import TypeVar

from agentbridge.addons.coercion import InvalidFormatError, coerce
from agentbridge.addons.proxy import ActionProxy
from agentbridge.protocols import ExecutionResult

logger = logging.getLogger("agentbridge.addons.binder")

P = TypeVar("P", bound=ActionProxy)


class ActionBinder:
    """Copies output values from an ExecutionResult onto a proxy."""

    def bind(self, proxy: P, result: ExecutionResult) -> P:
        """Update ``proxy``'s output fields in place and return it.

        Input fields are never written, even when the Agent echoes a changed
        value for them. Result fields the proxy does not declare are ignored,
        as are values that fail to coerce (the field keeps its prior value).
        """
        descriptor = proxy.descriptor
        for result_field in result.fields:
            if not result_field.is_output:
                continue

            field = descriptor.field_for(result_field.name)
            if field is None:
                logger.debug(
                    "Ignoring result field [%s]: not declared by %s",
                    result_field.name,
                    type(proxy).__name__,
                )
                continue

            # A server-side output flag cannot promote a client input
            if not field.is_output:
                continue

            try:
                value = coerce(field.kind, result_field.value)
            except InvalidFormatError as exc:
                logger.error(
                    "Failed to set field [%s] value to [%s]: %s",
                    result_field.name,
                    result_field.value,
                    exc,
                )
                continue

            setattr(proxy, field.attr, value)

        return proxy
