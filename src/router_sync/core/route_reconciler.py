from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from router_sync.interfaces.route_registry import RouteRegistry
from router_sync.logger import logger
from router_sync.utils.errors import RouteApplyError


@dataclass
class CyclePlan:
    to_upsert: Dict[str, str] = field(default_factory=dict)
    to_remove: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.to_upsert and not self.to_remove


@dataclass
class ApplyResult:
    upserted: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def reconcile(desired: Mapping[str, str], actual: Mapping[str, str]) -> CyclePlan:
    """
    Compute the calls needed to turn `actual` into `desired`.

    A route is upserted when it is missing or points at another backend, and
    removed when it is no longer desired. Matching routes produce no call.
    """
    logger.debug("[reconciler] Reconciling desired routes against mc-router")

    plan = CyclePlan()
    for address, backend in desired.items():
        if actual.get(address) != backend:
            plan.to_upsert[address] = backend

    for address in actual:
        if address not in desired:
            logger.info(f"[reconciler] Removing stale route: {address} -> {actual[address]}")
            plan.to_remove.append(address)

    return plan


def apply_plan(registry: RouteRegistry, plan: CyclePlan) -> ApplyResult:
    """
    Push a plan to the registry, upserts first.

    Each call stands alone: a rejected route is logged and the rest still run.
    Whatever failed is picked up again on the next cycle.
    """
    result = ApplyResult()

    for address, backend in plan.to_upsert.items():
        try:
            registry.register(address, backend)
            result.upserted.append(address)
        except RouteApplyError as e:
            logger.error(f"[reconciler] {e}")
            result.failed.append(address)

    for address in plan.to_remove:
        try:
            registry.remove(address)
            result.removed.append(address)
        except RouteApplyError as e:
            logger.error(f"[reconciler] {e}")
            result.failed.append(address)

    return result
