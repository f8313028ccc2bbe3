from typing import List, Literal

from pydantic import BaseModel


class RouteIntent(BaseModel):
    """
    A slug that should be routed to a backend under a list of domain suffixes.

    Both discovered containers and manual config entries are reduced to this
    shape before being expanded into route names.
    """

    slug: str
    backend: str
    suffixes: List[str]
    source: Literal["docker", "manual"]
    # A suffix containing "." stands for a complete address: the route name is the bare slug
    allow_full_domain: bool = False

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    def route_name(self, suffix: str) -> str:
        if self.allow_full_domain and "." in suffix:
            return self.slug
        return f"{self.slug}.{suffix}"

    def route_names(self) -> List[str]:
        return [self.route_name(suffix) for suffix in self.suffixes]
