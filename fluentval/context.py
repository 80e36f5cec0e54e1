"""Validation context — per-call execution state.

One root context is created for every validate() call and discarded once the
result is built. Property chains work in child contexts so that concurrent
chains never touch shared state; the validator merges children back in
declaration order.
"""

from typing import Any, Optional

from fluentval.models import Failure


class ValidationContext:
    """Instance under validation plus the failures accumulated so far."""

    def __init__(
        self,
        instance: Any,
        shape_name: str = "",
        property_name: Optional[str] = None,
        display_name: Optional[str] = None,
    ):
        self.instance = instance
        self.shape_name = shape_name
        self.property_name = property_name
        self.display_name = display_name if display_name is not None else (property_name or "")
        self._failures: list[Failure] = []
        self._inherited: tuple[Failure, ...] = ()

    @property
    def failures(self) -> tuple[Failure, ...]:
        """Read-only snapshot of the failures visible from this context."""
        return self._inherited + tuple(self._failures)

    def add_failure(self, failure: Failure) -> None:
        self._failures.append(failure)

    def for_property(
        self,
        property_name: str,
        display_name: Optional[str] = None,
        inherit_failures: bool = False,
    ) -> "ValidationContext":
        """Create a child context for one chain or cross-property rule.

        With inherit_failures the child also sees a snapshot of the failures
        already recorded here; only its own failures are merged back.
        """
        child = ValidationContext(
            self.instance,
            shape_name=self.shape_name,
            property_name=property_name,
            display_name=display_name,
        )
        if inherit_failures:
            child._inherited = self.failures
        return child

    def merge(self, child: "ValidationContext") -> None:
        self._failures.extend(child._failures)

    def __repr__(self) -> str:
        return (
            f"ValidationContext(shape={self.shape_name!r}, property={self.property_name!r}, "
            f"failures={len(self._failures)})"
        )
