"""In-memory index of saved routes, newest first."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .models import Route


class RouteCatalog:
    """Routes keyed by id plus a view sorted by ``start_time`` descending.

    A read-through cache: it never talks to storage. The owner refills it
    from :class:`footprint_tracker.storage.FootprintStorage` when needed.
    """

    def __init__(self) -> None:
        self._routes: List[Route] = []
        self._route_map: Dict[str, Route] = {}

    def add_route(self, route: Route) -> None:
        """Insert ``route``, replacing any route with the same id."""

        if route.id in self._route_map:
            self._routes = [item for item in self._routes if item.id != route.id]
        self._routes.append(route)
        # Stable sort keeps insertion order for equal start times.
        self._routes.sort(key=lambda item: item.start_time, reverse=True)
        self._route_map[route.id] = route

    def get_all_routes(self) -> Tuple[Route, ...]:
        return tuple(self._routes)

    def get_route(self, route_id: str) -> Optional[Route]:
        return self._route_map.get(route_id)

    def get_routes_by_title(self, title: str) -> List[Route]:
        return [route for route in self._routes if route.name == title]

    def delete_route_by_title(self, title: str) -> bool:
        """Remove every route named ``title``; False when none matched."""

        doomed = [route for route in self._routes if route.name == title]
        if not doomed:
            return False
        for route in doomed:
            del self._route_map[route.id]
        self._routes = [route for route in self._routes if route.name != title]
        return True

    def get_route_count(self) -> int:
        return len(self._routes)

    def clear(self) -> None:
        self._routes = []
        self._route_map = {}


def create_route_catalog() -> RouteCatalog:
    return RouteCatalog()
