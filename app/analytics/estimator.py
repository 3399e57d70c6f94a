"""
Per-booking resource and inventory estimates.

Menu items are looked up in a fixed catalog rather than substring-matched.
Every estimate is clamped per booking before it is summed into any aggregate,
so one malformed record cannot dominate a total.
"""
import math
import re
from collections import defaultdict
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set

from app.core.clock import local_day
from app.models.booking import Booking
from app.models.analytics import (
    BookingEstimate,
    EventTypeForecast,
    InventoryEstimate,
    ResourceEstimate,
    ResourceForecast,
    ResourceInsights,
)

RESOURCE_BOUNDS = {"seating": 200, "catering": 100, "staff": 50}
INVENTORY_BOUNDS = {"food": 500, "drinks": 300, "materials": 150}

ATTENDEES_PER_STAFF = 10
MATERIALS_PER_PERSON = 1.5

BASE_CATERING_RATE = 2
WEDDING_CATERING_RATE = 3
BUFFET_CATERING_RATE = 4


class MenuItem(Enum):
    # label, food per person, drinks per person
    MINI_PANCAKES = ("Mini Pancakes", 3, 0)
    FRUIT_CUPS = ("Fruit Cups", 2, 0)
    ICED_TEA = ("Iced Tea", 0, 1)

    def __init__(self, label: str, food_per_person: int, drinks_per_person: int):
        self.label = label
        self.food_per_person = food_per_person
        self.drinks_per_person = drinks_per_person


_MENU_LOOKUP = {item.label.casefold(): item for item in MenuItem}
_MENU_SEPARATORS = re.compile(r"[,;/\n+]")


def parse_menu(menu: Optional[str]) -> Set[MenuItem]:
    """Splits a menu field into recognized catalog items; unknown entries are ignored."""
    if not menu:
        return set()
    items = set()
    for token in _MENU_SEPARATORS.split(menu):
        item = _MENU_LOOKUP.get(token.strip().casefold())
        if item is not None:
            items.add(item)
    return items


def clamp(value, upper, lower=0):
    return min(max(value, lower), upper)


def catering_rate(booking: Booking) -> int:
    # Package rule wins over the event-type rule
    if booking.menu_package and "buffet" in booking.menu_package.casefold():
        return BUFFET_CATERING_RATE
    if booking.event_type and "wedding" in booking.event_type.casefold():
        return WEDDING_CATERING_RATE
    return BASE_CATERING_RATE


def estimate_resources(booking: Booking) -> ResourceEstimate:
    attendees = booking.num_attendees
    return ResourceEstimate(
        seating=clamp(attendees, RESOURCE_BOUNDS["seating"]),
        catering=clamp(attendees * catering_rate(booking), RESOURCE_BOUNDS["catering"]),
        staff=clamp(math.ceil(attendees / ATTENDEES_PER_STAFF), RESOURCE_BOUNDS["staff"]),
    )


def estimate_inventory(booking: Booking) -> InventoryEstimate:
    attendees = booking.num_attendees
    menu = parse_menu(booking.menu_package)
    food = sum(item.food_per_person for item in menu) * attendees
    drinks = sum(item.drinks_per_person for item in menu) * attendees
    return InventoryEstimate(
        food=clamp(food, INVENTORY_BOUNDS["food"]),
        drinks=clamp(drinks, INVENTORY_BOUNDS["drinks"]),
        materials=clamp(attendees * MATERIALS_PER_PERSON, INVENTORY_BOUNDS["materials"]),
    )


def estimate_booking(booking: Booking) -> BookingEstimate:
    return BookingEstimate(
        booking_id=booking.id,
        resources=estimate_resources(booking),
        inventory=estimate_inventory(booking),
    )


def forecast_by_event_type(bookings: Iterable[Booking], top: Optional[int] = None) -> ResourceForecast:
    """
    Sums clamped per-booking estimates per event type. Resource groups are
    ranked by total resources, inventory groups separately by food plus
    drinks; each ranking is cut to the top N on its own. Bookings without an
    event type are skipped.
    """
    resources: Dict[str, Dict[str, float]] = defaultdict(lambda: defaultdict(int))
    inventory: Dict[str, Dict[str, float]] = defaultdict(lambda: defaultdict(int))

    for booking in bookings:
        if not booking.event_type:
            continue
        for field, value in estimate_resources(booking).model_dump().items():
            resources[booking.event_type][field] += value
        for field, value in estimate_inventory(booking).model_dump().items():
            inventory[booking.event_type][field] += value

    groups = [
        EventTypeForecast(
            event_type=event_type,
            resources=ResourceEstimate(**resources[event_type]),
            inventory=InventoryEstimate(**inventory[event_type]),
        )
        for event_type in resources
    ]
    resource_groups = sorted(groups, key=lambda g: g.resources.total, reverse=True)[:top]
    inventory_groups = sorted(groups, key=lambda g: g.inventory.total, reverse=True)[:top]

    return ResourceForecast(
        groups=resource_groups,
        inventory_groups=inventory_groups,
        insights=resource_insights(resource_groups, inventory_groups),
    )


def _trend(values: List[float]) -> float:
    if len(values) < 2:
        return 0
    return values[-1] - values[-2]


def resource_insights(
    resource_groups: List[EventTypeForecast],
    inventory_groups: List[EventTypeForecast],
) -> Optional[ResourceInsights]:
    """
    Totals, per-group averages and a naive next-period prediction
    (total plus the last group-to-group step, floored at zero). Resource
    figures come from the resource ranking, inventory figures from the
    inventory ranking.
    """
    if not resource_groups or not inventory_groups:
        return None

    total_resources = ResourceEstimate(
        seating=sum(g.resources.seating for g in resource_groups),
        catering=sum(g.resources.catering for g in resource_groups),
        staff=sum(g.resources.staff for g in resource_groups),
    )
    total_inventory = InventoryEstimate(
        food=sum(g.inventory.food for g in inventory_groups),
        drinks=sum(g.inventory.drinks for g in inventory_groups),
        materials=sum(g.inventory.materials for g in inventory_groups),
    )

    resource_fields = ("seating", "catering", "staff")
    inventory_fields = ("food", "drinks")

    return ResourceInsights(
        total_resources=total_resources,
        average_resources={f: getattr(total_resources, f) / len(resource_groups) for f in resource_fields},
        predicted_resources={
            f: max(0, getattr(total_resources, f) + _trend([getattr(g.resources, f) for g in resource_groups]))
            for f in resource_fields
        },
        total_inventory=total_inventory,
        average_inventory={f: getattr(total_inventory, f) / len(inventory_groups) for f in inventory_fields},
        predicted_inventory={
            f: max(0, getattr(total_inventory, f) + _trend([getattr(g.inventory, f) for g in inventory_groups]))
            for f in inventory_fields
        },
    )


def allocate_supplies(bookings: Iterable[Booking], rates: Dict[str, float]) -> Dict[date, Dict[str, int]]:
    """Supplies needed per event day: ceil(attendees * rate), summed over that day's bookings."""
    allocations: Dict[date, Dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for booking in bookings:
        day = local_day(booking.event_date)
        for supply, rate in rates.items():
            allocations[day][supply] += math.ceil(booking.num_attendees * rate)
    return {day: dict(supplies) for day, supplies in sorted(allocations.items())}
