"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.seating.app.command import (
    create_instance_use_case,
    create_template_use_case,
    delete_layout_use_case,
    propagate_template_use_case,
    reconcile_units_use_case,
    replace_zones_use_case,
    reset_customization_use_case,
    update_instance_use_case,
    update_template_use_case,
)
from src.service.seating.app.query import (
    get_layout_use_case,
    list_instances_use_case,
    list_layout_units_use_case,
    list_layout_zones_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_template_use_case,
    update_template_use_case,
    create_instance_use_case,
    update_instance_use_case,
    reconcile_units_use_case,
    replace_zones_use_case,
    propagate_template_use_case,
    reset_customization_use_case,
    delete_layout_use_case,
    get_layout_use_case,
    list_instances_use_case,
    list_layout_units_use_case,
    list_layout_zones_use_case,
]
