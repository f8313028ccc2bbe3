from typing import Any, Dict, List, Optional


def parse_slugs(label_value: Optional[str]) -> List[str]:
    """Split a comma-separated slug label into trimmed, non-empty slugs."""
    if not label_value:
        return []
    return [slug.strip() for slug in label_value.split(",") if slug.strip()]


class ContainerRecord:
    def __init__(
        self,
        id: Optional[str],
        name: Optional[str] = None,
        labels: Optional[Dict[str, str]] = None,
        ports: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        self.id: str = id or "<unknown>"
        self.name: str = name or "<unknown>"
        self.labels: Dict[str, str] = labels or {}
        self.ports: List[Dict[str, Any]] = ports or []

    def slugs(self, label: str) -> List[str]:
        return parse_slugs(self.labels.get(label))

    def has_slug_label(self, label: str) -> bool:
        return bool(self.labels.get(label))

    @property
    def public_port(self) -> Optional[int]:
        # Only the first published port is routed
        if not self.ports:
            return None
        port = self.ports[0].get("PublicPort")
        return int(port) if port else None
