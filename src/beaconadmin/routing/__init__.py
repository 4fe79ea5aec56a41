"""Routing — ordered route table and single-flight navigation.

Routes are registered during setup and frozen before the first navigation.
"""

from beaconadmin.routing.navigation import (
    NavigationResult,
    NavigationStatus,
    Navigator,
)
from beaconadmin.routing.route import Integer, Literal, Route, RouteMatch, Wildcard
from beaconadmin.routing.router import Router, parse_pattern, split_location

__all__ = [
    "Integer",
    "Literal",
    "NavigationResult",
    "NavigationStatus",
    "Navigator",
    "Route",
    "RouteMatch",
    "Router",
    "Wildcard",
    "parse_pattern",
    "split_location",
]
