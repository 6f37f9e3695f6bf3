"""
Explicit route tables

Each routes module exposes a list of ``Route`` entries; the application
factory turns them into routers, so importing a module never registers
anything.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence

from fastapi import APIRouter


@dataclass(frozen=True)
class Route:
    path: str
    methods: Sequence[str]
    endpoint: Callable[..., Any]
    options: Dict[str, Any] = field(default_factory=dict)


def build_router(routes: List[Route]) -> APIRouter:
    """Create an APIRouter holding exactly the given routes"""
    router = APIRouter()
    for route in routes:
        router.add_api_route(
            route.path,
            route.endpoint,
            methods=list(route.methods),
            **route.options
        )
    return router
