"""Validator — runs property chains and cross-property rules, produces the result.

This is the runtime entry point. A Validator is built once by build_validator()
and reused for every instance of its shape; it keeps no per-call state, so one
instance can serve concurrent calls without locking.

Usage:
    validator = ValidatorBuilder("Customer")...build()
    result = validator.validate(customer)
    if not result.is_valid:
        # Map result.failures to the caller's error payload
"""

import asyncio
import time
from typing import Any, Iterable, Optional

from fluentval.chain import CrossPropertyRule, PropertyRuleChain
from fluentval.config import get_settings
from fluentval.context import ValidationContext
from fluentval.errors import AsyncRuleInvokedSynchronouslyError, ValidationCancelled
from fluentval.models import ValidationResult
from fluentval.observability import get_logger

logger = get_logger(__name__)


class Validator:
    """Immutable set of rule chains for one target shape.

    Design principles:
        - Deterministic: same instance → structurally equal result
        - Chains run in declaration order; cross-property rules run last
        - Rule crashes are reported as tagged failures, never raised
        - Observable: logs every run with timing, and every rule fault
    """

    def __init__(
        self,
        shape_name: str,
        chains: Iterable[PropertyRuleChain] = (),
        cross_property_rules: Iterable[CrossPropertyRule] = (),
        concurrent_async_chains: Optional[bool] = None,
    ):
        self._shape_name = shape_name
        self._chains = tuple(chains)
        self._cross_property_rules = tuple(cross_property_rules)
        if concurrent_async_chains is None:
            concurrent_async_chains = get_settings().CONCURRENT_ASYNC_CHAINS
        self._concurrent = concurrent_async_chains
        self._is_async = any(c.is_async for c in self._chains) or any(
            r.is_async for r in self._cross_property_rules
        )

    @property
    def shape_name(self) -> str:
        return self._shape_name

    @property
    def chains(self) -> tuple[PropertyRuleChain, ...]:
        return self._chains

    @property
    def cross_property_rules(self) -> tuple[CrossPropertyRule, ...]:
        return self._cross_property_rules

    @property
    def is_async(self) -> bool:
        """True when any rule must be awaited; such validators need validate_async()."""
        return self._is_async

    def validate(self, instance: Any) -> ValidationResult:
        """Validate an instance synchronously.

        Raises:
            AsyncRuleInvokedSynchronouslyError: the validator holds async rules
        """
        if self._is_async:
            raise AsyncRuleInvokedSynchronouslyError(self._shape_name)

        start_time = time.perf_counter()
        context = ValidationContext(instance, shape_name=self._shape_name)

        for chain in self._chains:
            context.merge(chain.execute(context))
        for cross_rule in self._cross_property_rules:
            context.merge(cross_rule.execute(context))

        return self._finish(context, start_time)

    async def validate_async(
        self,
        instance: Any,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ValidationResult:
        """Validate an instance, awaiting async rules.

        Independent chains may run concurrently; their failures are merged in
        declaration order. Setting cancel_event abandons in-flight rules.

        Raises:
            ValidationCancelled: cancel_event was set before the run finished
        """
        if cancel_event is not None and cancel_event.is_set():
            self._log_cancelled()
            raise ValidationCancelled(self._shape_name)

        start_time = time.perf_counter()
        context = ValidationContext(instance, shape_name=self._shape_name)

        if cancel_event is None:
            await self._run_async(context)
            return self._finish(context, start_time)

        work = asyncio.ensure_future(self._run_async(context))
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not work.done():
                work.cancel()
                await asyncio.gather(work, return_exceptions=True)

        if work.cancelled():
            self._log_cancelled()
            raise ValidationCancelled(self._shape_name)
        work.result()
        return self._finish(context, start_time)

    def validate_and_raise(self, instance: Any) -> ValidationResult:
        """Validate and raise ValidationException if the result is invalid."""
        result = self.validate(instance)
        result.raise_if_invalid()
        return result

    async def validate_and_raise_async(
        self,
        instance: Any,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ValidationResult:
        result = await self.validate_async(instance, cancel_event)
        result.raise_if_invalid()
        return result

    async def _run_async(self, context: ValidationContext) -> None:
        if self._concurrent:
            children = await asyncio.gather(*(chain.execute_async(context) for chain in self._chains))
        else:
            children = [await chain.execute_async(context) for chain in self._chains]

        # Declaration order, not completion order
        for child in children:
            context.merge(child)

        for cross_rule in self._cross_property_rules:
            context.merge(await cross_rule.execute_async(context))

    def _finish(self, context: ValidationContext, start_time: float) -> ValidationResult:
        result = ValidationResult(shape_name=self._shape_name, failures=context.failures)
        duration = (time.perf_counter() - start_time) * 1000

        logger.debug(
            "validation_complete",
            shape=self._shape_name,
            is_valid=result.is_valid,
            errors=len(result.errors),
            warnings=len(result.warnings),
            faults=len(result.faults),
            duration_ms=round(duration, 2),
        )
        return result

    def _log_cancelled(self) -> None:
        logger.info("validation_cancelled", shape=self._shape_name)

    def __repr__(self) -> str:
        return (
            f"Validator({self._shape_name!r}, chains={len(self._chains)}, "
            f"cross_property_rules={len(self._cross_property_rules)})"
        )
