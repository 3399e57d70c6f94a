from datetime import date

import pytest

from conftest import make_booking
from app.analytics.estimator import (
    MenuItem,
    allocate_supplies,
    estimate_inventory,
    estimate_resources,
    forecast_by_event_type,
    parse_menu,
)
from app.core.config_loader import DEFAULT_SUPPLY_RATES

def test_breakfast_and_beverage_booking():
    booking = make_booking("b1", num_attendees=50, menu_package="Mini Pancakes, Iced Tea")

    resources = estimate_resources(booking)
    assert (resources.seating, resources.staff, resources.catering) == (50, 5, 100)

    inventory = estimate_inventory(booking)
    assert (inventory.food, inventory.drinks, inventory.materials) == (150, 50, 75)

def test_menu_lookup_is_exact_not_substring():
    assert parse_menu("mini pancakes; ICED TEA / Chocolate Cake") == {MenuItem.MINI_PANCAKES, MenuItem.ICED_TEA}
    assert parse_menu("Iced Tea Jelly") == set()
    assert parse_menu(None) == set()

def test_wedding_raises_catering_rate():
    booking = make_booking("w", num_attendees=20, event_type="Wedding Reception")
    assert estimate_resources(booking).catering == 60

def test_buffet_package_takes_precedence_over_wedding():
    booking = make_booking("w", num_attendees=20, event_type="Wedding", menu_package="Grand Buffet")
    assert estimate_resources(booking).catering == 80

def test_estimates_are_clamped():
    booking = make_booking("big", num_attendees=5000, menu_package="Mini Pancakes, Fruit Cups, Iced Tea")
    resources = estimate_resources(booking)
    inventory = estimate_inventory(booking)
    assert (resources.seating, resources.catering, resources.staff) == (200, 100, 50)
    assert (inventory.food, inventory.drinks, inventory.materials) == (500, 300, 150)

def test_clamp_is_applied_before_aggregation():
    bookings = [
        make_booking("a", num_attendees=10, event_type="Birthday"),
        make_booking("b", num_attendees=10_000, event_type="Birthday"),
        make_booking("c", num_attendees=30, event_type="Corporate"),
        make_booking("d", num_attendees=30, event_type=None),
    ]
    forecast = forecast_by_event_type(bookings)

    assert [g.event_type for g in forecast.groups] == ["Birthday", "Corporate"]
    birthday = forecast.groups[0]
    assert birthday.resources.seating == 10 + 200
    assert birthday.resources.staff == 1 + 50

def test_top_n_and_insights():
    bookings = [
        make_booking("a", num_attendees=10, event_type="Small"),
        make_booking("b", num_attendees=40, event_type="Large"),
        make_booking("c", num_attendees=20, event_type="Medium"),
    ]
    forecast = forecast_by_event_type(bookings, top=2)
    assert [g.event_type for g in forecast.groups] == ["Large", "Medium"]

    insights = forecast.insights
    assert insights.total_resources.seating == 60
    assert insights.average_resources["seating"] == pytest.approx(30)
    # trend = last group minus previous: 20 - 40
    assert insights.predicted_resources["seating"] == pytest.approx(40)

def test_inventory_is_ranked_separately_from_resources():
    bookings = [
        make_booking("a", num_attendees=100, event_type="Conference"),
        make_booking("b", num_attendees=10, event_type="Brunch", menu_package="Mini Pancakes, Iced Tea"),
    ]
    forecast = forecast_by_event_type(bookings, top=1)
    assert [g.event_type for g in forecast.groups] == ["Conference"]
    assert [g.event_type for g in forecast.inventory_groups] == ["Brunch"]

    insights = forecast.insights
    assert insights.total_resources.seating == 100
    assert insights.total_inventory.food == 30
    assert insights.total_inventory.drinks == 10
    assert insights.average_inventory["food"] == pytest.approx(30)

def test_no_groups_means_no_insights():
    assert forecast_by_event_type([]).insights is None

def test_supplies_are_allocated_per_event_day():
    bookings = [
        make_booking("a", days_from_now=0, num_attendees=10),
        make_booking("b", days_from_now=0, num_attendees=5),
        make_booking("c", days_from_now=1, num_attendees=3),
    ]
    allocations = allocate_supplies(bookings, DEFAULT_SUPPLY_RATES)
    day_one, day_two = date(2024, 6, 15), date(2024, 6, 16)
    assert list(allocations) == [day_one, day_two]
    assert allocations[day_one]["tables"] == 2 + 1
    assert allocations[day_one]["napkins"] == 21 + 11
    assert allocations[day_two]["chairs"] == 3
